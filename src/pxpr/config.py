"""
Runtime configuration for pxpr.

Settings are read from ``PXPR_*`` environment variables and validated with
pydantic before being handed to the expression core.
"""

import os
from typing import Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from pxpr.expr.limits import ExpressionLimits

ENV_VAR_LOG_LEVEL = "PXPR_LOG_LEVEL"
ENV_VAR_MAX_EXPRESSION_LENGTH = "PXPR_MAX_EXPRESSION_LENGTH"
ENV_VAR_MAX_NESTING_DEPTH = "PXPR_MAX_NESTING_DEPTH"
ENV_VAR_MAX_AST_NODES = "PXPR_MAX_AST_NODES"
ENV_VAR_MAX_AST_DEPTH = "PXPR_MAX_AST_DEPTH"
ENV_VAR_PROMPT = "PXPR_PROMPT"

_ENV_FIELDS = {
    ENV_VAR_LOG_LEVEL: "log_level",
    ENV_VAR_MAX_EXPRESSION_LENGTH: "max_expression_length",
    ENV_VAR_MAX_NESTING_DEPTH: "max_nesting_depth",
    ENV_VAR_MAX_AST_NODES: "max_ast_nodes",
    ENV_VAR_MAX_AST_DEPTH: "max_ast_depth",
    ENV_VAR_PROMPT: "prompt",
}

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

# Parenthesized nesting recurses through the parser, roughly eight frames
# per level, so deeper settings would run into the interpreter stack.
MAX_NESTING_DEPTH_BOUND = 96


class CalculatorSettings(BaseModel):
    """Settings for the command-line calculator."""

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = "warning"

    # Expression limits passed through to the core
    max_expression_length: int = Field(default=4096, gt=0)
    max_nesting_depth: int = Field(default=64, gt=0, le=MAX_NESTING_DEPTH_BOUND)
    max_ast_nodes: int = Field(default=4096, gt=0)
    max_ast_depth: int = Field(default=4096, gt=0)

    # Interactive prompt
    prompt: str = "expr > "

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "CalculatorSettings":
        """Builds settings from environment variables, ignoring unset ones."""
        environ = os.environ if environ is None else environ
        values: Dict[str, str] = {}
        for env_var, field_name in _ENV_FIELDS.items():
            raw = environ.get(env_var)
            if raw is None:
                continue
            values[field_name] = raw.lower() if field_name == "log_level" else raw
        return cls.model_validate(values)

    def to_limits(self) -> ExpressionLimits:
        return ExpressionLimits(
            max_expression_length=self.max_expression_length,
            max_nesting_depth=self.max_nesting_depth,
            max_ast_nodes=self.max_ast_nodes,
            max_ast_depth=self.max_ast_depth,
        )
