"""Template action definition shared by the scaffolder actions.

A template action is a named step a template can run while creating a project.
It declares a JSON-schema-like description of its input, a few YAML examples
for documentation, and an async handler receiving an ActionContext.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from scaffolder_actions.core.exceptions import InputError


@dataclass
class ActionContext:
    """
    Context an action handler runs in.

    Attributes:
        workspace_path: Directory holding the project being generated
        input: Values passed to the action by the template
        logger: Logger the handler reports progress to
        output: Values the handler exposes to later steps
    """

    workspace_path: Path
    input: dict[str, Any] = field(default_factory=dict)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("scaffolder_actions.action"))
    output: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.workspace_path = Path(self.workspace_path)


Handler = Callable[[ActionContext], Awaitable[Any]]


@dataclass(frozen=True)
class TemplateAction:
    """
    A scaffolder action.

    Attributes:
        id: Identifier templates refer to the action by, e.g. ``workflow:write``
        handler: Coroutine function executing the action
        description: Human readable summary
        schema: Input schema in JSON-schema form
        examples: Documentation examples, each with a description and a YAML example
    """

    id: str
    handler: Handler
    description: str = ""
    schema: dict[str, Any] = field(default_factory=dict)
    examples: list[dict[str, str]] = field(default_factory=list)

    def validate_input(self, values: Any) -> None:
        """Check the input against the declared object properties."""
        if not isinstance(values, dict):
            msg = f"Input of action {self.id} must be a mapping"
            raise InputError(msg)

        properties = self.schema.get("input", {}).get("properties", {})
        for name, value in values.items():
            expected = properties.get(name, {}).get("type")
            if expected == "string" and value is not None and not isinstance(value, str):
                msg = f"Input '{name}' of action {self.id} must be a string"
                raise InputError(msg)

    async def run(self, ctx: ActionContext) -> Any:
        """Validate the context input and execute the handler."""
        self.validate_input(ctx.input)
        logging.debug("action: running %s in %s", self.id, ctx.workspace_path)
        return await self.handler(ctx)
