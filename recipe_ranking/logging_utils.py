"""Structured single-line logging for the recipe ranking core.

Format (one line per entry):
<RunId>|<Date>|<Time>|<Level>|<File:Line>|<Module.Func>|<ModulePurpose>|
<InvokingFunc>|<InvokingFuncPurpose>|<Detail>|<NextStep>|<Resolution>|<END>

Library modules only call get_logger(); entry points (the CLI) call
init_logging() once to attach the formatter to the root logger.
"""

import datetime
import logging
import uuid
from typing import Dict

RUN_ID: str = uuid.uuid4().hex[:8]


class StructuredFormatter(logging.Formatter):
    """Emit a single '|' separated line per log record."""

    # High-level purposes by module name
    MODULE_PURPOSES: Dict[str, str] = {
        "pipeline": "Rank a page of recipes for a user with tiered scoring",
        "batch_cooking": "Rank batch-cooking friendly recipes for a user",
        "recipe_db": "Serve recipe rows from a JSON document",
        "user_profile": "Load scoring preferences and history from YAML",
        "local_provider": "Assemble preference and behavior data per request",
        "settings": "Load pipeline tuning from YAML",
        "shopping_list": "Aggregate ingredient quantities across recipes",
        "cli": "Developer command line for the ranking core",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record into structured pipe-delimited format."""
        dt = datetime.datetime.fromtimestamp(record.created)
        date_str = dt.strftime("%Y-%m-%d")
        time_str = dt.strftime("%H:%M:%S")

        run_id = getattr(record, "run_id", RUN_ID)

        level = record.levelname
        code_location = f"{record.filename}:{record.lineno}"
        func_name = record.funcName
        module_name = record.module
        module_purpose = self.MODULE_PURPOSES.get(module_name, "")

        # Optional extra context supplied via logger calls
        invoking_func = getattr(record, "invoking_func", "")
        invoking_purpose = getattr(record, "invoking_purpose", "")
        next_step = getattr(record, "next_step", "")
        resolution = getattr(record, "resolution", "")

        detail = record.getMessage()
        if record.exc_info:
            detail = f"{detail} EXC={record.exc_info[1]!r}"

        return (
            f"{run_id}|{date_str}|{time_str}|{level}|{code_location}|"
            f"{module_name}.{func_name}|{module_purpose}|"
            f"{invoking_func}|{invoking_purpose}|"
            f"{detail}|{next_step}|{resolution}|<END>"
        )


def init_logging(level: int = logging.INFO) -> None:
    """Initialize the root logger once with StructuredFormatter."""
    root = logging.getLogger()
    if root.handlers:
        # Already configured; avoid double handlers in REPL / test runners
        return

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger.

    Usage:
        logger = get_logger(__name__)
        logger.warning(
            "No preferences for user %s",
            user_id,
            extra={
                "invoking_func": "recommend",
                "next_step": "Return None",
                "resolution": "Complete preference setup",
            },
        )
    """
    return logging.getLogger(name)
