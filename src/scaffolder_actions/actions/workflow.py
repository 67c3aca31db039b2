"""The ``workflow:write`` action.

Writes a fixed GitHub Actions workflow that deploys the generated service to
the dev preview environment through the shared ``deploy-service.yml``
workflow.
"""

from pathlib import Path

import yaml

from scaffolder_actions.utils.paths import resolve_safe_child_path

from .base import ActionContext, TemplateAction

ACTION_ID = "workflow:write"
WORKFLOW_PATH = ".github/workflows/test.yaml"

EXAMPLES = [
    {
        "description": "Write a deployment workflow file",
        "example": yaml.safe_dump(
            {
                "steps": [
                    {
                        "action": ACTION_ID,
                        "id": "create-workflow-file",
                        "name": "Create workflow file",
                        "input": {
                            "repoUrl": "github.com?repo=service&owner=acme",
                        },
                    },
                ],
            },
            sort_keys=False,
        ),
    },
]

DEFAULT_WORKFLOW = {
    "name": "Auth :: Deploy :: Dev",
    "on": "workflow_dispatch",
    "jobs": {
        "deploy-dev-preview": {
            "uses": "./.github/workflows/deploy-service.yml",
            "with": {
                "github-environment": "DevPreview",
                "stage": "$(echo ${{ github.actor }} | awk '{print tolower($0)}')",
                "service-name": "@shieldpay/auth",
                "service-path": "backend/services/auth",
                "lint-code": False,
                "test-code": False,
                "github-author": "${{ github.actor }}",
                "install-everything": True,
            },
            "secrets": {
                "aws-role-arn": "${{ secrets.DEPLOYMENT_ROLE_ARN }}",
                "aws-account-id": "${{ secrets.AWS_ACCOUNT_ID }}",
            },
        },
    },
}


def render_workflow() -> str:
    """Render the default workflow as YAML, keeping the key order."""
    return yaml.safe_dump(DEFAULT_WORKFLOW, sort_keys=False)


async def write_workflow(ctx: ActionContext) -> Path:
    """Write the default workflow into the workspace and return its path."""
    ctx.logger.info("Writing workflow file %s", WORKFLOW_PATH)

    path = resolve_safe_child_path(ctx.workspace_path, WORKFLOW_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_workflow(), encoding="utf-8")

    ctx.output["path"] = WORKFLOW_PATH
    return path


def create_workflow_action() -> TemplateAction:
    """Create the ``workflow:write`` action."""
    return TemplateAction(
        id=ACTION_ID,
        handler=write_workflow,
        description="Writes a deployment workflow file to the workspace.",
        schema={
            "input": {
                "type": "object",
                "properties": {
                    "repoUrl": {
                        "title": "Repository Location",
                        "description": (
                            "Accepts the format 'github.com?repo=reponame&owner=owner' where 'reponame' is "
                            "the repository name and 'owner' is an organization or username"
                        ),
                        "type": "string",
                    },
                },
            },
        },
        examples=EXAMPLES,
    )
