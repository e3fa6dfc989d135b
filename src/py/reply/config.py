from os import getenv

# Defaults applied to every new response
CONTENT_TYPE: str = getenv("REPLY_CONTENT_TYPE", "text/html")
CHARSET: str = getenv("REPLY_CHARSET", "UTF-8")

# Gzip level used when a response is compressed (0-9)
COMPRESSION_LEVEL: int = int(getenv("REPLY_COMPRESSION_LEVEL", 6))

# Size of the chunks read when sending files
CHUNK_SIZE: int = int(getenv("REPLY_CHUNK_SIZE", 64_000))

LOG_RESPONSES: bool = getenv("REPLY_LOG_RESPONSES", "1") == "1"

# EOF
