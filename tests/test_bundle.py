import os

import bundle


def test_pixi_is_external():
    assert bundle.is_external("PIXI")
    assert not bundle.is_external("pixi")
    assert not bundle.is_external("fable-powerpack")


def test_alias_bare_package(tmp_path):
    resolved = bundle.resolve_alias("fable-powerpack", base=str(tmp_path))
    assert resolved == str(tmp_path / "node_modules" / "fable-powerpack" / "es2015")


def test_alias_subpath(tmp_path):
    resolved = bundle.resolve_alias("fable-powerpack/Fetch", base=str(tmp_path))
    assert resolved == os.path.join(
        str(tmp_path), "node_modules", "fable-powerpack", "es2015", "Fetch"
    )


def test_alias_needs_whole_package_name():
    assert bundle.resolve_alias("fable-powerpack-extra") is None
    assert bundle.resolve_alias("fable-core") is None


def test_render():
    text = bundle.render()
    assert 'dest: "./out/bundle.js"' in text
    assert 'external: ["PIXI"]' in text
    assert '"fable-powerpack": path.resolve("node_modules/fable-powerpack/es2015")' in text
    assert 'require("rollup-plugin-alias")' in text


def test_main_writes_config(tmp_path, capsys):
    target = tmp_path / "rollup.config.js"
    bundle.main(["bundle.py", str(target)])
    assert target.read_text() == bundle.render()
    assert f"Wrote {target}" in capsys.readouterr().out
