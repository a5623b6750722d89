"""Accept / edit / cancel confirmation of generated content.

The workflow is a small state machine:

    PRESENTING -> AWAITING_CHOICE -> RESOLVED
                                  -> EDITING -> RESOLVED

It never returns to PRESENTING. The only suspension points are the
Prompter calls, so the same machine serves a terminal or any other UI.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from vibe.llm.parsing import PRContent

logger = logging.getLogger(__name__)

GeneratedContent = Union[str, PRContent]


class Action(Enum):
    """The user's choice."""

    ACCEPT = "accept"
    EDIT = "edit"
    CANCEL = "cancel"


class State(Enum):
    """Workflow states."""

    PRESENTING = "presenting"
    AWAITING_CHOICE = "awaiting_choice"
    EDITING = "editing"
    RESOLVED = "resolved"


class CancelEdit(Exception):
    """Raised by a Prompter to abandon editing and cancel the workflow."""

    pass


@dataclass(frozen=True)
class ConfirmationOutcome:
    """Terminal result of a confirmation.

    On CANCEL the payload is the unedited content and must be ignored.
    """

    action: Action
    payload: GeneratedContent

    @property
    def confirmed(self) -> bool:
        return self.action in (Action.ACCEPT, Action.EDIT)


class Prompter(ABC):
    """User interaction surface used by the workflow."""

    @abstractmethod
    def render(self, content: GeneratedContent) -> None:
        """Show the generated content."""
        pass

    @abstractmethod
    def choose(self) -> Optional[Action]:
        """Ask for accept, edit or cancel. None means the answer was not understood."""
        pass

    @abstractmethod
    def edit_message(self, message: str) -> str:
        """Return replacement text for a commit message (blank keeps it)."""
        pass

    @abstractmethod
    def edit_pr(self, title: str, description: str) -> tuple[str, str]:
        """Return replacement title and description (blank keeps each)."""
        pass


class ConfirmationWorkflow:
    """One confirmation interaction. Each instance runs once."""

    def __init__(self, prompter: Prompter):
        self.prompter = prompter
        self.state = State.PRESENTING

    def _enter(self, state: State) -> None:
        logger.debug("Confirmation %s -> %s", self.state.value, state.value)
        self.state = state

    def _resolve(self, action: Action, payload: GeneratedContent) -> ConfirmationOutcome:
        self._enter(State.RESOLVED)
        return ConfirmationOutcome(action=action, payload=payload)

    def _edit(self, content: GeneratedContent) -> GeneratedContent:
        if isinstance(content, PRContent):
            title, description = self.prompter.edit_pr(content.title, content.description)
            return PRContent(
                title=title.strip() or content.title,
                description=description.strip() or content.description,
            )
        message = self.prompter.edit_message(content)
        return message.strip() or content

    def run(self, content: GeneratedContent) -> ConfirmationOutcome:
        """Present content and wait for the user's decision.

        Args:
            content: A commit message or PRContent.

        Returns:
            The outcome, with the edited payload on EDIT.

        Raises:
            RuntimeError: If this workflow has already run.
        """
        if self.state is not State.PRESENTING:
            raise RuntimeError(f"Confirmation already run (state: {self.state.value})")

        self.prompter.render(content)
        self._enter(State.AWAITING_CHOICE)

        action = None
        while action is None:
            action = self.prompter.choose()

        if action is not Action.EDIT:
            return self._resolve(action, content)

        self._enter(State.EDITING)
        try:
            edited = self._edit(content)
        except CancelEdit:
            return self._resolve(Action.CANCEL, content)
        return self._resolve(Action.EDIT, edited)
