"""Jinja2 templating for generated files.

Basic usage:
    from poli_qa.templating import create_environment

    env = create_environment()
    source = env.get_template("checklists.ts.j2").render(screens=screens)
"""

from ._environment import (
    PACKAGE_TEMPLATE_DIR,
    EnvironmentConfig,
    create_environment,
    ts_string,
)

__all__ = [
    "PACKAGE_TEMPLATE_DIR",
    "EnvironmentConfig",
    "create_environment",
    "ts_string",
]
