"""Profile file parsing, validation, selection and overlay tests."""

from __future__ import annotations

import json

import pytest

from relay_providers.config.profiles import (
    Profile,
    ProfileError,
    apply_profile,
    find_profile_file,
    load_profile_file,
    parse_profile_text,
    profile_overlay,
    substitute_env_refs,
)

_DOC = {
    "default": "work",
    "profiles": {
        "local": {"api_key": "dummy", "provider": "ollama", "base_url": "http://localhost:11434", "model": "llama3.1:8b"},
        "work": {"api_key": "$OPENAI_API_KEY", "provider": "OpenAI", "model": "gpt-4o", "max_tokens": 512, "temperature": 0.3, "top_p": 0.9},
    },
}


def test_parse_json_and_normalize_provider():
    parsed = parse_profile_text(json.dumps(_DOC))
    assert parsed.default == "work"  # nosec B101
    assert parsed.profiles["work"].provider == "openai"  # nosec B101


def test_parse_yaml_fallback():
    text = """
default: local
profiles:
  local:
    provider: ollama
    model: qwen2.5:14b
    temperature: 0.1
"""
    parsed = parse_profile_text(text)
    name, profile = parsed.select()
    assert name == "local" and profile.model == "qwen2.5:14b"  # nosec B101


@pytest.mark.parametrize(
    "doc,fragment",
    [
        ({"default": "missing", "profiles": {"a": {}}}, "default profile 'missing' not found"),
        ({"profiles": {"a": {"provider": "acme"}}}, "invalid provider 'acme'"),
        ({"profiles": {"a": {"temperature": 2.5}}}, "profiles.a.temperature"),
        ({"profiles": {"a": {"top_p": -0.1}}}, "profiles.a.top_p"),
        ({"profiles": {"a": {"max_tokens": -1}}}, "profiles.a.max_tokens"),
        ({"default": "a"}, "must contain a 'profiles' object"),
    ],
)
def test_validation_errors(doc, fragment):
    with pytest.raises(ProfileError) as excinfo:
        parse_profile_text(json.dumps(doc))
    assert fragment in str(excinfo.value)  # nosec B101


def test_unparseable_text_is_profile_error():
    with pytest.raises(ProfileError):
        parse_profile_text("profiles: [unclosed")


def test_selection_order():
    parsed = parse_profile_text(json.dumps(_DOC))
    assert parsed.select("local")[0] == "local"  # nosec B101
    assert parsed.select()[0] == "work"  # nosec B101
    no_default = parse_profile_text(json.dumps({"profiles": {"second": {}, "first": {}}}))
    assert no_default.select()[0] == "second"  # nosec B101
    with pytest.raises(ProfileError, match="profile 'nope' not found"):
        parsed.select("nope")
    with pytest.raises(ProfileError, match="no profiles defined"):
        parse_profile_text(json.dumps({"profiles": {}})).select()


def test_substitute_env_refs():
    env = {"KEY": "sk-1", "HOST": "gpu", "EMPTY": ""}
    assert substitute_env_refs("$KEY", env) == "sk-1"  # nosec B101
    assert substitute_env_refs("http://${HOST}:11434", env) == "http://gpu:11434"  # nosec B101
    assert substitute_env_refs("$UNSET-$EMPTY", env) == "$UNSET-$EMPTY"  # nosec B101
    assert substitute_env_refs(None, env) is None  # nosec B101


def test_overlay_formats_values():
    profile = parse_profile_text(json.dumps(_DOC)).profiles["work"]
    overlay = profile_overlay(profile, {"OPENAI_API_KEY": "sk-live"})
    assert overlay == {  # nosec B101
        "RELAY_API_KEY": "sk-live",
        "RELAY_PROVIDER": "openai",
        "RELAY_MODEL": "gpt-4o",
        "RELAY_MAX_TOKENS": "512",
        "RELAY_TEMPERATURE": "0.30",
        "RELAY_TOP_P": "0.90",
    }


def test_overlay_skips_unset_and_zero_fields():
    overlay = profile_overlay(Profile(model="m", max_tokens=0, temperature=0.0), {})
    assert overlay == {"RELAY_MODEL": "m"}  # nosec B101


def test_apply_profile_overrides_without_mutating():
    env = {"RELAY_MODEL": "from-env", "OTHER": "x"}
    merged = apply_profile(Profile(model="from-profile"), env)
    assert merged["RELAY_MODEL"] == "from-profile" and merged["OTHER"] == "x"  # nosec B101
    assert env["RELAY_MODEL"] == "from-env"  # nosec B101


def test_find_profile_file_search_order(tmp_path):
    cwd = tmp_path / "cwd"
    home = tmp_path / "home2"
    cwd.mkdir()
    home.mkdir()
    assert find_profile_file(env={}, cwd=cwd, home=home) is None  # nosec B101
    (home / ".relay").write_text("{}", encoding="utf-8")
    assert find_profile_file(env={}, cwd=cwd, home=home) == home / ".relay"  # nosec B101
    (cwd / ".relay").write_text("{}", encoding="utf-8")
    assert find_profile_file(env={}, cwd=cwd, home=home) == cwd / ".relay"  # nosec B101

    other = tmp_path / "custom.json"
    other.write_text("{}", encoding="utf-8")
    assert find_profile_file(env={"RELAY_CONFIG_FILE": str(other)}, cwd=cwd, home=home) == other  # nosec B101
    assert find_profile_file(str(other), env={}, cwd=cwd, home=home) == other  # nosec B101


def test_explicit_missing_file_is_error(tmp_path):
    with pytest.raises(ProfileError, match="not found"):
        find_profile_file(str(tmp_path / "absent"), env={})


def test_load_profile_file(tmp_path):
    path = tmp_path / ".relay"
    path.write_text(json.dumps(_DOC), encoding="utf-8")
    assert set(load_profile_file(path).profiles) == {"local", "work"}  # nosec B101
