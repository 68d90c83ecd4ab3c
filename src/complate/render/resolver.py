"""Variable resolution with a fixed precedence chain.

For each declared variable, in declaration order, the first lookup that
produces a value wins:

    1. override map entry          -> OVERRIDE
    2. interactive backend answer  -> INTERACTIVE
    3. shell default (trust-gated) -> SHELL_COMPUTED
    4. static default              -> STATIC_DEFAULT
    5. nothing                     -> MISSING

Completeness is applied afterwards by :func:`enforce_completeness`.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from .backends import Backend
from .exceptions import MissingRequiredVariables, PrivilegeDenied
from .models import (
    ResolvedValue,
    ShellCommand,
    StaticValue,
    TemplateSpec,
    ValueSource,
    VariableSpec,
)
from .trust import (
    DEFAULT_SHELL_TIMEOUT,
    Decision,
    ShellRunner,
    ShellTrustGate,
    run_shell_command,
)

logger = logging.getLogger(__name__)

Lookup = Callable[[VariableSpec, Mapping[str, str]], Optional[str]]


class VariableResolver:
    """Resolve every variable of a template for one render.

    Usage:
        resolver = VariableResolver(backend, ShellTrustGate(TrustMode.NONE))
        values = resolver.resolve(template, overrides={"name": "Ava"})
    """

    def __init__(
        self,
        backend: Backend,
        trust_gate: ShellTrustGate,
        runner: ShellRunner | None = None,
        shell_timeout: float | None = DEFAULT_SHELL_TIMEOUT,
    ) -> None:
        self.backend = backend
        self.trust_gate = trust_gate
        self.runner = runner or run_shell_command
        self.shell_timeout = shell_timeout
        self._chain: List[Tuple[ValueSource, Lookup]] = [
            (ValueSource.OVERRIDE, self._from_override),
            (ValueSource.INTERACTIVE, self._from_backend),
            (ValueSource.SHELL_COMPUTED, self._from_shell),
            (ValueSource.STATIC_DEFAULT, self._from_static),
        ]

    def resolve(
        self,
        template: TemplateSpec,
        overrides: Mapping[str, str] | None = None,
    ) -> list[ResolvedValue]:
        """Resolve all variables of ``template`` in declaration order."""
        overrides = overrides or {}
        return [self.resolve_variable(variable, overrides) for variable in template.variables]

    def resolve_variable(
        self,
        variable: VariableSpec,
        overrides: Mapping[str, str],
    ) -> ResolvedValue:
        for source, lookup in self._chain:
            value = lookup(variable, overrides)
            if value is not None:
                logger.debug("Resolved %s from %s", variable.name, source)
                return ResolvedValue(name=variable.name, value=value, source=source)

        logger.debug("No value for %s", variable.name)
        return ResolvedValue(name=variable.name, value="", source=ValueSource.MISSING)

    @staticmethod
    def _from_override(variable: VariableSpec, overrides: Mapping[str, str]) -> str | None:
        return overrides.get(variable.name)

    def _from_backend(self, variable: VariableSpec, overrides: Mapping[str, str]) -> str | None:
        return self.backend.query(variable)

    def _from_shell(self, variable: VariableSpec, overrides: Mapping[str, str]) -> str | None:
        if not isinstance(variable.default, ShellCommand):
            return None

        command = variable.default.command
        decision = self.trust_gate.authorize(command)
        if decision == Decision.ABORT:
            raise PrivilegeDenied(
                f"Trust mode '{self.trust_gate.mode}' needs a confirmation for "
                f"'{variable.name}' but the active backend cannot prompt."
            )
        if decision == Decision.SKIP:
            logger.debug("Shell default for %s skipped by trust policy", variable.name)
            return None

        return self.runner(command, self.shell_timeout)

    @staticmethod
    def _from_static(variable: VariableSpec, overrides: Mapping[str, str]) -> str | None:
        if isinstance(variable.default, StaticValue):
            return variable.default.value
        return None


def missing_required(values: Sequence[ResolvedValue], template: TemplateSpec) -> list[str]:
    """Names of required variables that resolved to MISSING, in declaration order."""
    required = {v.name for v in template.variables if v.required}
    return [rv.name for rv in values if rv.is_missing and rv.name in required]


def enforce_completeness(
    values: Sequence[ResolvedValue],
    template: TemplateSpec,
    loose: bool,
) -> list[ResolvedValue]:
    """Apply the strict/loose completeness policy.

    Strict mode raises if any required variable is missing. Loose mode, and
    optional variables in either mode, render missing values as "".

    Raises:
        MissingRequiredVariables: In strict mode, listing every missing name.
    """
    missing = missing_required(values, template)
    if missing and not loose:
        raise MissingRequiredVariables(missing)
    if missing:
        logger.info("Loose mode: rendering empty values for %s", ", ".join(missing))

    return [
        ResolvedValue(name=rv.name, value="", source=rv.source) if rv.is_missing else rv
        for rv in values
    ]
