#!/usr/bin/env python3
"""
bundle.py — bundler settings for the browser build.

The bundle itself is produced by rollup. This module holds its settings and
writes them out as the config file rollup reads:

Usage:
    python bundle.py                     # writes ./rollup.config.js
    python bundle.py build/rollup.js     # writes somewhere else
"""

import json
import os
import sys


OUTPUT = "./out/bundle.js"

# PIXI will be loaded directly from a script tag
EXTERNAL = ["PIXI"]

# Rollup understands es2015 modules better, so load the es2015
# distribution of fable-powerpack
ALIASES = {
    "fable-powerpack": "node_modules/fable-powerpack/es2015",
}

CONFIG_FILE = "rollup.config.js"


def is_external(module_id, external=EXTERNAL):
    """True when ``module_id`` is supplied by the host page, not bundled."""
    return module_id in external


def resolve_alias(module_id, aliases=ALIASES, base="."):
    """Rewrite an import of an aliased package to its target directory.

    Both the bare package name and ``name/sub/path`` imports are rewritten;
    the target is resolved against ``base``. Returns None when no alias
    applies.
    """
    for name, target in aliases.items():
        if module_id == name:
            rest = ""
        elif module_id.startswith(name + "/"):
            rest = module_id[len(name) + 1:]
        else:
            continue
        resolved = os.path.abspath(os.path.join(base, target))
        return os.path.join(resolved, rest) if rest else resolved
    return None


def render(output=OUTPUT, external=EXTERNAL, aliases=ALIASES):
    """Return the text of rollup.config.js for these settings."""
    entries = ",\n".join(
        f"    {json.dumps(name)}: path.resolve({json.dumps(target)})"
        for name, target in aliases.items()
    )
    return (
        'var path = require("path");\n'
        'var alias = require("rollup-plugin-alias");\n'
        "\n"
        "module.exports = {\n"
        f"  dest: {json.dumps(output)},\n"
        f"  external: {json.dumps(list(external))},\n"
        "  plugins: [alias({\n"
        f"{entries}\n"
        "  })]\n"
        "};\n"
    )


def write_config(path=CONFIG_FILE):
    with open(path, "w", encoding="utf-8") as f:
        f.write(render())
    return path


def main(argv=None):
    if argv is None:
        argv = sys.argv
    path = argv[1] if len(argv) > 1 else CONFIG_FILE
    try:
        write_config(path)
    except OSError as e:
        print(f"Cannot write {path}: {e}")
        sys.exit(1)
    print(f"Wrote {path}")


if __name__ == "__main__":
    main()
