"""Tests for the module-level i18n API."""

import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

import i18nkit
from i18nkit import i18n
from i18nkit.config_loader import I18nConfig
from i18nkit.errors import InvalidLanguageError
from i18nkit.preferences import FilePreferenceStore, MemoryPreferenceStore
from i18nkit.proxy import ResourceProxy


def _write_json(path, data):
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


@pytest.fixture(autouse=True)
def fresh_context():
    """Reset the shared context between tests without replacing it."""
    ctx = i18n.get_context()
    i18n.setup(I18nConfig())
    ctx.reset()
    ctx.set_language("")
    i18n._loaded_paths.clear()
    yield ctx
    i18n.setup(I18nConfig())
    ctx.reset()
    ctx.set_language("")
    i18n._loaded_paths.clear()


@pytest.fixture
def locales(tmp_path):
    _write_json(tmp_path / "strings_en.json", {
        "app": {"title": "Title", "greeting": "Hello {{name}}"},
        "only_en": "English only",
    })
    _write_json(tmp_path / "strings_zh.json", {"app": {"title": "标题", "greeting": "你好 {{name}}"}})
    return tmp_path


def test_context_is_shared():
    assert i18n.get_context() is i18n.get_context()
    assert i18nkit.get_context() is i18n.get_context()


def test_setup_sets_language():
    i18n.setup(I18nConfig(language="en", allowed_languages=["en", "zh"]))
    assert i18n.get_locale() == "en"
    assert i18n.get_language() == "en"


def test_setup_keeps_same_context():
    ctx = i18n.get_context()
    i18n.setup(I18nConfig(language="en"))
    assert i18n.get_context() is ctx


def test_setup_loads_resources(locales):
    i18n.setup(I18nConfig(language="en", resource_paths=["strings.json"], base_url=str(locales)))
    assert i18n.get_text("app.title") == "Title"


def test_setup_restores_language_from_preferences(tmp_path):
    prefs = tmp_path / "prefs.yaml"
    FilePreferenceStore(str(prefs)).set("language", "zh")
    i18n.setup(I18nConfig(language="en", preference_file=str(prefs)))
    assert i18n.get_language() == "zh"


def test_t_returns_text():
    i18n.set_resource({"responses": {"heard": "Heard: {{command}}"}})
    assert i18n.t("responses.heard", command="stop") == "Heard: stop"


def test_t_missing_key():
    assert i18n.t("nonexistent.key.path") == "Invalid key: nonexistent.key.path"
    assert i18n.t("nonexistent.key.path", "Fallback") == "Fallback"


def test_get_returns_nodes():
    i18n.set_resource({"hallucinations": {"phrases": ["a", "b"]}})
    assert i18n.get("hallucinations.phrases") == ["a", "b"]
    assert i18n.get("hallucinations.other") is i18nkit.MISSING


def test_get_text_overload():
    i18n.set_resource({"a": "Hi {{n}}"})
    assert i18n.get_text("a", {"n": 1}) == "Hi 1"
    assert i18n.get_text("b", "Default") == "Default"


def test_format_text_exported():
    assert i18nkit.format_text("Hello {{name}}", {"name": "Ada"}) == "Hello Ada"


def test_get_i18n_text():
    i18n.set_resource({"app": {"greeting": "Hello {{name}}"}})
    token = {"key": "app.greeting", "text": "Hi {{name}}"}
    assert i18n.get_i18n_text(token, {"name": "Ada"}) == "Hello Ada"
    assert i18n.get_i18n_text({"key": "app.nope", "text": "Hi {{name}}"}, {"name": "Bo"}) == "Hi Bo"


def test_get_i18n_text_always_interpolates():
    i18n.set_resource({"app": {"greeting": "Hello {{name}}"}})
    assert i18n.get_i18n_text({"key": "app.greeting"}) == "Hello Missing"
    assert i18n.get_i18n_text({"key": "app.nope"}) == "Invalid key: app.nope"


def test_create_resource_proxy_uses_shared_context():
    strings = i18n.create_resource_proxy({"greeting": {"hello": "Hi"}}, "app")
    assert isinstance(strings, ResourceProxy)
    assert strings.greeting.hello == "Hi"
    assert strings.greeting.bye == "missing key: [app.greeting.bye]"
    assert i18n.get_text("app.greeting.hello") == "Hi"


def test_load_resources_uses_language_suffix(locales):
    i18n.set_language("zh")
    loaded = i18n.load_resources("strings.json", base_url=str(locales))
    assert loaded == [str(locales / "strings_zh.json")]
    assert i18n.t("app.greeting", name="Ada") == "你好 Ada"


def test_language_switch_without_reload_keeps_old_strings(locales):
    i18n.set_language("en")
    i18n.load_resources("strings.json", base_url=str(locales))
    i18n.set_language("zh")
    assert i18n.get_text("app.title") == "Title"


def test_language_switch_with_reload(locales):
    i18n.setup(I18nConfig(base_url=str(locales)))
    i18n.set_language("en")
    i18n.load_resources("strings.json")
    i18n.set_language("zh", reload=True)
    assert i18n.get_text("app.title") == "标题"
    # keys absent from the new language keep their previous text
    assert i18n.get_text("only_en") == "English only"


def test_reload_on_language_change_setting(locales):
    i18n.setup(I18nConfig(base_url=str(locales), reload_on_language_change=True))
    i18n.set_language("en")
    i18n.load_resources("strings.json")
    i18n.set_language("zh")
    assert i18n.get_text("app.title") == "标题"


def test_set_language_persists():
    store = MemoryPreferenceStore()
    i18n.set_language("ja", store=store)
    assert store.get("language") == "ja"
    i18n.set_language("ko", store=store, key="ui_lang")
    assert store.get("ui_lang") == "ko"


def test_set_language_validating_policy():
    i18n.setup(I18nConfig(language="en", allowed_languages=["en", "zh"]))
    with pytest.raises(InvalidLanguageError):
        i18n.set_language("fr")
    assert i18n.get_language() == "en"


def test_initialize_from_store():
    i18n.initialize(MemoryPreferenceStore({"language": "zh"}))
    assert i18n.get_language() == "zh"


def test_initialize_custom_key():
    i18n.initialize(MemoryPreferenceStore({"lang": "de"}), key="lang")
    assert i18n.get_language() == "de"


def test_initialize_without_stored_value():
    i18n.set_language("en")
    i18n.initialize(MemoryPreferenceStore())
    assert i18n.get_language() == "en"


def test_initialize_rejects_disallowed_value(capsys):
    i18n.setup(I18nConfig(language="en", allowed_languages=["en"]))
    i18n.initialize(MemoryPreferenceStore({"language": "xx"}))
    assert i18n.get_language() == "en"
    assert "not allowed" in capsys.readouterr().out


def test_reload_uses_base_url_given_to_load_resources(locales):
    i18n.set_language("en")
    i18n.load_resources("strings.json", base_url=str(locales))
    i18n.set_language("zh", reload=True)
    assert i18n.get_text("app.title") == "标题"


def test_reload_keeps_each_request_location(locales, tmp_path_factory):
    other = tmp_path_factory.mktemp("other")
    _write_json(other / "extra_en.json", {"extra": "Extra"})
    _write_json(other / "extra_zh.json", {"extra": "额外"})
    i18n.set_language("en")
    i18n.load_resources("strings.json", base_url=str(locales))
    i18n.load_resources("extra.json", base_url=str(other))
    i18n.set_language("zh", reload=True)
    assert i18n.get_text("app.title") == "标题"
    assert i18n.get_text("extra") == "额外"


def test_setup_with_allowed_languages_resets_stale_language():
    i18n.set_language("fr")
    i18n.setup(I18nConfig(allowed_languages=["en", "zh"]))
    ctx = i18n.get_context()
    assert ctx.language == "en"
    assert ctx.is_allowed_language(ctx.language)


def test_get_i18n_text_without_key():
    assert i18n.get_i18n_text({}) == "Invalid key: "
    assert i18n.get_i18n_text({"text": "Hi {{name}}"}, {"name": "Ada"}) == "Hi Ada"


class FailingStore(MemoryPreferenceStore):
    def set(self, key, value):
        raise OSError("read-only file system")


def test_set_language_survives_preference_write_failure(locales, capsys):
    i18n.set_language("en")
    i18n.load_resources("strings.json", base_url=str(locales))
    i18n.set_language("zh", store=FailingStore(), reload=True)
    assert i18n.get_language() == "zh"
    assert i18n.get_text("app.title") == "标题"
    assert "Failed to persist language" in capsys.readouterr().out
