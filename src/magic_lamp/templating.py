"""Kida environment setup.

Creates a kida Environment from LampConfig. The environment is created
once per registry and shared by every controller it instantiates.
"""

from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader

from magic_lamp.config import LampConfig


def create_environment(config: LampConfig) -> Environment:
    """Create a kida Environment from fixture configuration.

    Supports multiple template directories via ``config.component_dirs``
    for partials and shared templates. Relative component directories
    resolve against ``config.root``.
    """
    loaders = [FileSystemLoader(str(config.template_path))]
    for directory in config.component_dirs:
        path = config.root_path / directory
        loaders.append(FileSystemLoader(str(path)))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render a full template to string."""
    return env.get_template(name).render(context)


def render_block(env: Environment, name: str, block: str, context: dict[str, Any]) -> str:
    """Render a named block from a template to string."""
    return env.get_template(name).render_block(block, context)


def render_inline(env: Environment, source: str, context: dict[str, Any]) -> str:
    """Render a template from a source string."""
    return env.from_string(source).render(context)
