"""HTTP surface for fixtures.

    from magic_lamp.server import FixturesApp
"""

from magic_lamp.config import LampConfig
from magic_lamp.server.app import FixturesApp

__all__ = ["FixturesApp", "create_app"]


def create_app(config: LampConfig | None = None) -> FixturesApp:
    """Build a FixturesApp rooted at the current directory by default."""
    return FixturesApp(config=config)
