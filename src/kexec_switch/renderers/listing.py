"""--list renderer: the resolved inventory as a tab-separated table or JSON."""

import json

from jinja2 import Environment

from ..schema import Inventory


def render(inventory: Inventory, env: Environment, output: str = "text") -> str:
    if output == "json":
        return json.dumps(
            {
                "boot_dir": inventory.boot_dir,
                "running_release": inventory.running_release,
                "entries": [
                    dict(e.model_dump(), current=(e.version == inventory.running_release))
                    for e in inventory.entries
                ],
                "skipped": inventory.skipped,
            },
            ensure_ascii=False,
            indent=2,
        )
    return env.get_template("list.txt").render(
        entries=inventory.entries,
        running=inventory.running_release,
    )
