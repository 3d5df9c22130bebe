"""Static settings for loading and rendering fixtures.

One LampConfig per registry. Fixture-time behaviour that lamp files may
change (callbacks, default controller) lives in Configuration instead.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class LampConfig:
    """Fixture loading and rendering configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LampConfig(root="myproject", template_dir="myproject/templates")
    """

    # Project root; fixtures live under <root>/spec or <root>/test
    root: str | Path = field(default_factory=Path.cwd)

    # Fixture files
    fixtures_dir_name: str = "magic_lamp"
    lamp_file_suffix: str = "_lamp.py"
    config_file_name: str = "magic_lamp_config.py"

    # Templates
    template_dir: str | Path = "templates"
    # Additional template directories (partials, shared)
    component_dirs: tuple[str | Path, ...] = ()
    template_suffix: str = ".html"
    autoescape: bool = True
    trim_blocks: bool = False
    lstrip_blocks: bool = False

    # HTTP surface
    mount_path: str = "/magic_lamp"
    debug: bool = False

    # Logging
    log_level: str = "info"

    @property
    def root_path(self) -> Path:
        """The project root as a :class:`~pathlib.Path`."""
        return Path(self.root)

    @property
    def template_path(self) -> Path:
        """Template directory, resolved against the root when relative."""
        path = Path(self.template_dir)
        if path.is_absolute():
            return path
        return self.root_path / path
