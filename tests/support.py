"""Controllers, templates and an on-disk project layout shared by the tests."""

from pathlib import Path

from magic_lamp.controller import Controller

TEMPLATES = {
    "index.html": "<h1>Index</h1>",
    "orders/foo.html": "foo",
    "orders/bar.html": "bar",
    "orders/show.html": "<h1>{{ title }}</h1>",
    "orders/_order.html": "<li>Order {{ order }}</li>",
    "orders/summary.html": "<div>{% block total %}<p>{{ total }}</p>{% end %}</div>",
    "line_items/_line_item.html": "<li>{{ line_item }}</li>",
    "shared/_banner.html": "<aside>{{ text }}</aside>",
}


class OrdersController(Controller):
    pass


class LineItemsController(Controller):
    pass


ORDERS_LAMP = '''\
import magic_lamp
from magic_lamp.controller import Controller


class OrdersController(Controller):
    pass


magic_lamp.register_fixture(lambda c: c.render("foo"), controller=OrdersController)
magic_lamp.register_fixture(lambda c: c.render("bar"), controller=OrdersController)


@magic_lamp.fixture(controller=OrdersController)
def order(c):
    c.render(partial="order", order=7)
'''

INDEX_LAMP = '''\
import magic_lamp

magic_lamp.register_fixture(lambda c: c.render("index"))
'''

CONFIG_FILE = '''\
import magic_lamp


@magic_lamp.configure
def setup(config):
    config.global_defaults["loaded_from"] = __file__
'''


def write_project(root: Path, fixtures_root: str = "spec") -> Path:
    """Lay out templates, lamp files and a config file under *root*.

    Returns the lamp file directory.
    """
    for name, source in TEMPLATES.items():
        path = root / "templates" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)

    lamp_dir = root / fixtures_root / "magic_lamp"
    (lamp_dir / "orders").mkdir(parents=True)
    (lamp_dir / "orders" / "orders_lamp.py").write_text(ORDERS_LAMP)
    (lamp_dir / "index_lamp.py").write_text(INDEX_LAMP)
    (lamp_dir / "magic_lamp_config.py").write_text(CONFIG_FILE)
    return lamp_dir
