import os
import sys
import time
import inspect
from enum import Enum
from typing import NamedTuple, Any, ClassVar, TypeAlias
from contextvars import ContextVar
from .primitives import TPrimitive

ERR = sys.stderr

# SEE: https://no-color.org/
NO_COLOR: bool = "NO_COLOR" in os.environ
FORCE_COLOR: bool = "FORCE_COLOR" in os.environ
COLOR: bool = FORCE_COLOR or NO_COLOR is False

LogOrigin: ContextVar[str] = ContextVar("LogOrigin", default="reply")


class Term:
	BOLD: ClassVar[str] = "" if NO_COLOR else "\033[1m"
	RESET: ClassVar[str] = "" if NO_COLOR else "\033[0m"

	@staticmethod
	def Color(color: int) -> str:
		return f"\033[0;38;5;{color}m" if COLOR else ""


class LogType(Enum):
	Message = 0  # A general information message
	Event = 20  # An event


class LogLevel(Enum):
	Debug = 0
	Info = 10
	Warning = 30
	Error = 40  # A managed error
	Exception = 50  # An un-managed error


LOG_LEVEL_COLOR = {
	LogLevel.Debug: 31,
	LogLevel.Info: 75,
	LogLevel.Warning: 202,
	LogLevel.Error: 160,
	LogLevel.Exception: 124,
}


class LogEntry(NamedTuple):
	origin: str
	time: float
	type: LogType = LogType.Message
	level: LogLevel = LogLevel.Info
	message: str | None = None
	name: str | None = None
	value: TPrimitive | None = None
	context: dict[str, TPrimitive] | None = None
	stack: list[str] | None = None


TStack: TypeAlias = list[str]


def callstack(offset: int = 1) -> TStack:
	"""Returns the names of the functions/methods on the call stack, methods
	being prefixed with their class name."""
	return [
		(
			f"{_.frame.f_locals['self'].__class__.__qualname__}.{_.function}"
			if "self" in _.frame.f_locals
			else _.function
		).replace("<lambda>", "λ")
		for _ in reversed(inspect.stack()[offset + 1 :])
	]


def formatData(value: Any) -> str:
	if value is None or value == () or value == [] or value == {}:
		return "◌"
	elif isinstance(value, dict):
		return " ".join(
			f"{Term.BOLD}{k}{Term.RESET}={formatData(v)}" for k, v in value.items()
		)
	elif isinstance(value, list) or isinstance(value, tuple):
		return ",".join(formatData(v) for v in value)
	elif isinstance(value, str):
		return repr(value) if " " in value else value
	elif isinstance(value, bool):
		return "✓" if value else "✗"
	elif isinstance(value, float):
		return f"{value:0.2f}"
	else:
		return str(value)


def send(entry: LogEntry) -> LogEntry:
	clr: str = Term.Color(LOG_LEVEL_COLOR[entry.level])
	if entry.type == LogType.Event:
		ERR.write(
			f"{clr}{Term.BOLD}[{entry.origin}] {entry.name}{Term.RESET} {formatData(entry.value)} {formatData(entry.context)}{Term.RESET}\n"
		)
	else:
		ERR.write(
			f"{clr}{Term.BOLD}[{entry.origin}]{Term.RESET} {entry.message} {formatData(entry.context)}{Term.RESET}\n"
		)
	if entry.stack:
		ERR.write(
			f"{clr}  {' ' * len(entry.origin)} {'→'.join(entry.stack)}{Term.RESET}\n"
		)
	ERR.flush()
	return entry


def entry(
	*,
	origin: str | None = None,
	type: LogType = LogType.Message,
	level: LogLevel = LogLevel.Info,
	message: str | None = None,
	name: str | None = None,
	value: TPrimitive | None = None,
	context: dict[str, TPrimitive],
	stack: TStack | None = None,
) -> LogEntry:
	return LogEntry(
		origin=origin or LogOrigin.get(),
		time=time.time(),
		type=type,
		level=level,
		message=message,
		name=name,
		value=value,
		context=context,
		stack=stack,
	)


def debug(
	message: str,
	*,
	origin: str | None = None,
	stack: bool = False,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			level=LogLevel.Debug,
			origin=origin,
			context=context,
			stack=callstack(1) if stack else None,
		)
	)


def warning(
	message: str,
	*,
	origin: str | None = None,
	stack: bool = False,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			level=LogLevel.Warning,
			origin=origin,
			context=context,
			stack=callstack(1) if stack else None,
		)
	)


def error(
	message: str,
	code: int | str | None,
	*,
	origin: str | None = None,
	stack: bool = False,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			value=code,
			level=LogLevel.Error,
			origin=origin,
			context=context,
			stack=callstack(1) if stack else None,
		)
	)


def event(
	event: str,
	value: Any = None,
	*,
	origin: str | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			name=event,
			value=value,
			type=LogType.Event,
			origin=origin,
			context=context,
		)
	)


def exception(
	exception: Exception,
	message: str | None = None,
) -> Exception:
	try:
		stream = ERR
		stream.write(
			f"!!! EXCP {f'{message}: [{exception.__class__.__name__}] {exception}' if message else f'[{exception.__class__.__name__}] {exception}'}\n"
		)
		tb = exception.__traceback__
		while tb:
			code = tb.tb_frame.f_code
			stream.write(
				f"... in {code.co_name:15s} at {tb.tb_lineno:4d} in {code.co_filename}\n",
			)
			tb = tb.tb_next
		stream.flush()
	except Exception:  # nosec: B110
		# Writing the trace must never mask the exception being reported
		pass
	return exception


# EOF
