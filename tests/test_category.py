from __future__ import annotations

import logging

import pytest

from preftree.model import Category, Group, Setting, flatten_categories, translate_categories
from factories import make_group, sample_tree


class _UpperTranslator:
    def translate(self, key: str) -> str:
        return key.upper()


def test_of_description_only_has_no_groups():
    cat = Category.of("Screen")
    assert cat.description == "Screen"
    assert cat.description_key == "Screen"
    assert cat.groups is None
    assert cat.children is None
    assert cat.breadcrumb == "Screen"
    assert cat.item_icon is None
    assert cat.auto_expand is False


def test_of_with_groups_keeps_order():
    g1, g2 = make_group("A", "a1"), make_group("B", "b1")
    cat = Category.of("Screen", g1, g2)
    assert cat.groups == (g1, g2)


def test_of_with_settings_wraps_each_setting_in_own_group():
    s1, s2 = Setting.of("Zoom"), Setting.of("Brightness")
    cat = Category.of("Screen", s1, s2)
    assert len(cat.groups) == 2
    assert [g.settings for g in cat.groups] == [(s1,), (s2,)]


def test_of_with_icon():
    icon = object()
    cat = Category.of("Screen", make_group(None, "x"), icon=icon)
    assert cat.item_icon is icon
    assert len(cat.groups) == 1
    assert Category.of("Empty", icon=icon).groups is None


def test_of_rejects_mixed_groups_and_settings():
    with pytest.raises(TypeError):
        Category.of("Mixed", make_group(None, "x"), Setting.of("y"))


def test_fluent_sub_categories_and_expand_return_self():
    child = Category.of("Child")
    parent = Category.of("Parent")
    assert parent.sub_categories(child) is parent
    assert parent.expand() is parent
    assert parent.children == (child,)
    assert parent.auto_expand is True


def test_fluent_call_on_sealed_category_warns(caplog):
    cat = Category.of("Sealed")
    cat.seal()
    with caplog.at_level(logging.WARNING, logger="preftree.model.category"):
        cat.expand()
    assert cat.auto_expand
    assert any("after it was registered" in r.getMessage() for r in caplog.records)


def test_translate_with_service_and_reset():
    cat = Category.of("screen")
    cat.translate(_UpperTranslator())
    assert cat.description == "SCREEN"
    cat.translate(None)
    assert cat.description == "screen"


def test_translate_empty_key_is_noop():
    cat = Category.of("")
    cat.translate(_UpperTranslator())
    assert cat.description == ""


def test_description_change_notifies_subscribers():
    cat = Category.of("screen")
    changes = []
    sub = cat.on_description_changed(lambda change: changes.append((change.old, change.new)))
    cat.translate(_UpperTranslator())
    cat.translate(_UpperTranslator())  # unchanged -> no notification
    assert changes == [("screen", "SCREEN")]
    sub.cancel()
    cat.translate(None)
    assert len(changes) == 1


def test_breadcrumb_change_notifies_subscribers():
    cat = Category.of("Screen")
    seen = []
    cat.on_breadcrumb_changed(lambda change: seen.append(change.new))
    cat.breadcrumb = "General#Screen"
    assert seen == ["General#Screen"]


def test_update_group_descriptions_forwards_to_groups():
    group = make_group("display", "brightness")
    cat = Category.of("screen", group)
    cat.update_group_descriptions(_UpperTranslator())
    assert group.description == "DISPLAY"
    assert group.settings[0].description == "BRIGHTNESS"
    # Without a service the last one is reapplied
    group.description = "stale"
    cat.update_group_descriptions()
    assert group.description == "DISPLAY"


def test_update_group_descriptions_without_groups_is_noop():
    Category.of("Empty").update_group_descriptions(_UpperTranslator())


def test_flatten_categories_pre_order():
    categories, named = sample_tree()
    flat = flatten_categories(categories)
    assert [c.description for c in flat] == [
        "General",
        "Screen",
        "Colors",
        "Sound",
        "Advanced",
    ]
    assert flatten_categories(None) == []


def test_translate_categories_retranslates_and_restamps():
    categories, named = sample_tree()
    translate_categories(categories, _UpperTranslator())
    assert named["colors"].description == "COLORS"
    assert named["colors"].breadcrumb == "GENERAL#SCREEN#COLORS"
    assert named["display"].description == "DISPLAY"
    assert named["advanced"].breadcrumb == "ADVANCED"


def test_str_is_description():
    assert str(Category.of("Screen")) == "Screen"


def test_group_default_description_and_settings_tuple():
    group = Group(settings=[Setting.of("a")])
    assert isinstance(group.settings, tuple)
    assert group.description == ""
