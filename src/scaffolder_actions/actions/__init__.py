"""Template actions run by the scaffolder."""

from .base import ActionContext, TemplateAction
from .workflow import create_workflow_action

__all__ = ["ActionContext", "TemplateAction", "create_workflow_action"]
