"""Orders: fixtures for an order list, served to a JavaScript test runner.

Lamp files live in ``spec/magic_lamp/``; templates in ``templates/``.

Run:
    uvicorn app:app
"""

from pathlib import Path

from magic_lamp.config import LampConfig
from magic_lamp.server import FixturesApp

app = FixturesApp(config=LampConfig(root=Path(__file__).parent))
