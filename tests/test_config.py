"""Tests for quire.yaml loading."""

import pytest
from pydantic import ValidationError

from quire.config import QuireConfig, find_config


def write_project(root):
    (root / "templates").mkdir()
    (root / "templates" / "header.tpl").write_text("<h1>{{ title | upper }}</h1>")
    (root / "person.yaml").write_text("type: object\nfields:\n  name:\n    type: string\n    required: true\n")
    config = root / "quire.yaml"
    config.write_text(
        "templates:\n"
        "  header: templates/header.tpl\n"
        "vars:\n"
        "  title: Hello\n"
        "schemas:\n"
        "  person: person.yaml\n"
        "max_include_depth: 4\n"
    )
    return config


def test_load_missing_file_gives_defaults(tmp_path):
    cfg = QuireConfig.load(tmp_path / "quire.yaml")
    assert cfg.templates == {}
    assert cfg.max_include_depth == 64


def test_load_empty_file(tmp_path):
    path = tmp_path / "quire.yaml"
    path.write_text("")
    assert QuireConfig.load(path) == QuireConfig()


@pytest.mark.parametrize("depth", [0, 2000])
def test_invalid_depth_rejected(tmp_path, depth):
    path = tmp_path / "quire.yaml"
    path.write_text(f"max_include_depth: {depth}\n")
    with pytest.raises(ValidationError):
        QuireConfig.load(path)


def test_build_scope(tmp_path):
    cfg = QuireConfig.load(write_project(tmp_path))
    scope = cfg.build_scope(tmp_path)

    assert scope.max_include_depth == 4
    assert scope.render("header") == "<h1>HELLO</h1>"


def test_load_schema(tmp_path):
    cfg = QuireConfig.load(write_project(tmp_path))
    schema = cfg.load_schema("person", tmp_path)

    assert schema.is_valid({"name": "ada"})
    assert not schema.is_valid({})
    with pytest.raises(KeyError, match="schema not found: animal"):
        cfg.load_schema("animal", tmp_path)


def test_find_config_walks_parents(tmp_path):
    config = write_project(tmp_path)
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_config(nested) == config.resolve()

