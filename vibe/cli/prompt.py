"""Terminal implementation of the confirmation prompter."""

from typing import Optional

import typer

from vibe.cli.utils import edit_text
from vibe.confirm import Action, CancelEdit, GeneratedContent, Prompter
from vibe.llm.parsing import PRContent

SEPARATOR = "-" * 50

CHOICES = {
    "a": Action.ACCEPT,
    "accept": Action.ACCEPT,
    "e": Action.EDIT,
    "edit": Action.EDIT,
    "c": Action.CANCEL,
    "cancel": Action.CANCEL,
}


class TerminalPrompter(Prompter):
    """Prompts on the terminal; long text is edited in an external editor."""

    def __init__(self, editor: Optional[str] = None):
        self.editor = editor

    def render(self, content: GeneratedContent) -> None:
        if isinstance(content, PRContent):
            typer.echo("\nGenerated PR:")
            typer.echo(SEPARATOR)
            typer.echo(f"Title: {content.title}\n")
            typer.echo("Description:")
            typer.echo(content.description)
        else:
            typer.echo("\nGenerated commit message:")
            typer.echo(SEPARATOR)
            typer.echo(content)
        typer.echo(SEPARATOR)

    def choose(self) -> Optional[Action]:
        answer = typer.prompt(
            "What would you like to do? [a]ccept / [e]dit / [c]ancel",
            default="a",
            show_default=False,
        )
        action = CHOICES.get(answer.strip().lower())
        if action is None:
            typer.echo("Please answer accept, edit or cancel.", err=True)
        return action

    def edit_message(self, message: str) -> str:
        try:
            return edit_text(message, self.editor, suffix=".txt")
        except typer.Abort:
            raise CancelEdit()

    def edit_pr(self, title: str, description: str) -> tuple[str, str]:
        try:
            new_title = typer.prompt(
                f"PR title (blank keeps '{title}')",
                default="",
                show_default=False,
            )
            new_description = edit_text(description, self.editor)
        except typer.Abort:
            raise CancelEdit()
        return new_title, new_description
