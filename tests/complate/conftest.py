"""Pytest fixtures for complate tests."""

from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from unittest.mock import MagicMock

from complate.render.models import (
    Config,
    ShellCommand,
    StaticValue,
    TemplateSpec,
    VariableSpec,
)


class ScriptedBackend:
    """Backend double answering from dictionaries and recording every call."""

    def __init__(
        self,
        answers: Optional[Dict[str, Optional[str]]] = None,
        selection: Optional[str] = None,
        confirmations: Optional[List[bool]] = None,
        can_confirm: bool = True,
    ) -> None:
        self.answers = answers or {}
        self.selection = selection
        self.confirmations = list(confirmations or [])
        self.can_confirm = can_confirm
        self.queried: List[str] = []
        self.confirm_messages: List[str] = []
        self.selection_candidates: List[List[str]] = []

    def select_template(self, candidates):
        self.selection_candidates.append(list(candidates))
        return self.selection

    def query(self, variable):
        self.queried.append(variable.name)
        return self.answers.get(variable.name)

    def confirm(self, message):
        self.confirm_messages.append(message)
        return self.confirmations.pop(0) if self.confirmations else False


@pytest.fixture
def scripted_backend():
    """Factory for ScriptedBackend instances."""
    return ScriptedBackend


@pytest.fixture
def shell_spy():
    """Shell runner double: returns 'shell-output' and records calls."""
    return MagicMock(return_value="shell-output")


@pytest.fixture
def greet_template():
    """Template `greet` with a single required variable and no default."""
    return TemplateSpec(
        name="greet",
        body="Hello {{ name }}!",
        variables=(VariableSpec(name="name", prompt_text="Who to greet?"),),
    )


@pytest.fixture
def greet_config(greet_template):
    return Config(templates=(greet_template,))


@pytest.fixture
def mixed_template():
    """Template covering every kind of default."""
    return TemplateSpec(
        name="commit",
        body="{{ type }}({{ scope }}): {{ summary }} by {{ author }}",
        variables=(
            VariableSpec(name="type", default=StaticValue("feat")),
            VariableSpec(name="scope", required=False),
            VariableSpec(name="summary", prompt_text="Summary"),
            VariableSpec(name="author", default=ShellCommand("git config user.name")),
        ),
    )


@pytest.fixture
def two_template_config(greet_template, mixed_template):
    return Config(templates=(greet_template, mixed_template))
