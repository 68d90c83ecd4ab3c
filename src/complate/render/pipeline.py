"""Render pipeline orchestrator.

Sequences the stages of one render:

    Stage 1: privilege gate       (reject early, before any interaction)
    Stage 2: template selection   (implicit, explicit or via the backend)
    Stage 3: variable resolution  (precedence chain + completeness policy)
    Stage 4: placeholder substitution

The first RenderError stops the pipeline; no partial output is produced.
Errors carry the stage that raised them.
"""

from __future__ import annotations

import logging

from .backends import Backend, create_backend
from .exceptions import (
    ConfigurationEmpty,
    RenderCancelled,
    RenderError,
    Stage,
    TemplateNotFound,
)
from .models import Config, RenderRequest, TemplateSpec
from .privilege import check_privileges
from .renderer import render
from .resolver import VariableResolver, enforce_completeness
from .trust import DEFAULT_SHELL_TIMEOUT, ShellRunner, ShellTrustGate

logger = logging.getLogger(__name__)


def select_template(config: Config, name: str | None, backend: Backend) -> TemplateSpec:
    """Pick the template to render.

    - zero templates: ConfigurationEmpty
    - explicit name: must exist, else TemplateNotFound
    - exactly one template: implicit default
    - otherwise: the backend chooses
    """
    if len(config) == 0:
        raise ConfigurationEmpty()

    if name is not None:
        template = config.lookup(name)
        if template is None:
            raise TemplateNotFound(name, config.names())
        return template

    if len(config) == 1:
        return config.templates[0]

    chosen = backend.select_template(config.names())
    template = config.lookup(chosen)
    if template is None:
        raise TemplateNotFound(chosen, config.names())
    return template


def render_request(
    request: RenderRequest,
    backend: Backend | None = None,
    runner: ShellRunner | None = None,
) -> str:
    """Run one render cycle and return the rendered text.

    Args:
        request: Fully parsed render request.
        backend: Backend instance to use; created from ``request.backend``
            when omitted.
        runner: Shell runner used for shell defaults (tests inject spies).

    Raises:
        RenderError: The first failure, with ``stage`` set.
    """
    stage = Stage.PRIVILEGE
    try:
        check_privileges(
            request.privilege,
            request.backend,
            request.overrides,
            request.trust_mode,
        )

        if backend is None:
            backend = create_backend(request.backend)

        stage = Stage.SELECTION
        template = select_template(request.config, request.template_name, backend)
        logger.debug("Rendering template %s", template.name)

        stage = Stage.RESOLUTION
        resolver = VariableResolver(
            backend,
            ShellTrustGate(request.trust_mode, backend),
            runner=runner,
            shell_timeout=(
                DEFAULT_SHELL_TIMEOUT if request.shell_timeout is None else request.shell_timeout
            ),
        )
        values = resolver.resolve(template, request.overrides)
        values = enforce_completeness(values, template, request.loose)

        stage = Stage.RENDER
        return render(template.body, values)
    except RenderCancelled as exc:
        exc.stage = stage
        raise
    except RenderError as exc:
        logger.debug("Render failed at %s stage: %s", exc.stage, exc)
        raise
