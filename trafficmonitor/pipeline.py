# trafficmonitor/pipeline.py
# Azure Pipelines logging commands (##vso[...]) written to stdout.

from __future__ import annotations

import sys
from enum import Enum
from typing import Optional, TextIO


class TaskResult(str, Enum):
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


def escape_data(value: str) -> str:
    return value.replace("%", "%AZP25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace("]", "%5D").replace(";", "%3B")


def format_command(command: str, message: str = "", **properties: str) -> str:
    props = "".join(f"{key}={escape_property(str(value))};" for key, value in properties.items())
    header = f"{command} {props}" if props else command
    return f"##vso[{header}]{escape_data(message)}"


def _write(line: str, stream: Optional[TextIO]) -> None:
    out = stream or sys.stdout
    out.write(line + "\n")
    out.flush()


def log_error(message: str, stream: Optional[TextIO] = None) -> None:
    _write(format_command("task.logissue", message, type="error"), stream)


def log_debug(message: str, stream: Optional[TextIO] = None) -> None:
    _write(format_command("task.debug", message), stream)


def set_result(result: TaskResult, message: str = "", stream: Optional[TextIO] = None) -> None:
    _write(format_command("task.complete", message, result=result.value), stream)
