import unittest
from pathlib import Path

from json_llm_translate.utils import (
    derive_output_path,
    describe_locale,
    find_missing_translations,
    get_language_name,
    merge_translations,
)


class TestFindMissingTranslations(unittest.TestCase):
    def test_no_existing_translation(self):
        source = {"a": "Hi", "b": {"c": "Bye"}}
        self.assertEqual(find_missing_translations(source, {}), source)

    def test_only_missing_keys_are_returned(self):
        self.assertEqual(
            find_missing_translations({"a": "Hi", "b": "Bye"}, {"a": "Hola"}),
            {"b": "Bye"},
        )

    def test_empty_values_count_as_missing(self):
        source = {"a": "A", "b": "B", "c": "C", "d": "D", "e": "E"}
        existing = {"a": "", "b": None, "c": 0, "d": False, "e": "É"}

        self.assertEqual(
            find_missing_translations(source, existing),
            {"a": "A", "b": "B", "c": "C", "d": "D"},
        )

    def test_nested_objects_keep_only_missing_keys(self):
        source = {"menu": {"open": "Open", "close": "Close", "sub": {"x": "X"}}, "title": "T"}
        existing = {"menu": {"open": "Abrir", "sub": {"x": "Equis"}}, "title": "Título"}

        self.assertEqual(
            find_missing_translations(source, existing),
            {"menu": {"close": "Close"}},
        )

    def test_nested_object_replaced_by_scalar_is_missing(self):
        source = {"menu": {"open": "Open"}}
        self.assertEqual(
            find_missing_translations(source, {"menu": "oops"}),
            {"menu": {"open": "Open"}},
        )

    def test_complete_translation_has_nothing_missing(self):
        source = {"a": "Hi", "n": {"b": "Bye"}}
        translated = merge_translations({}, {"a": "Hola", "n": {"b": "Adiós"}})

        self.assertEqual(find_missing_translations(source, translated), {})

    def test_inputs_are_not_modified(self):
        source = {"a": "Hi", "n": {"b": "Bye"}}
        existing = {"n": {}}
        find_missing_translations(source, existing)

        self.assertEqual(source, {"a": "Hi", "n": {"b": "Bye"}})
        self.assertEqual(existing, {"n": {}})


class TestMergeTranslations(unittest.TestCase):
    def test_identities(self):
        existing = {"a": "Hola", "n": {"b": "Adiós"}}
        self.assertEqual(merge_translations(existing, {}), existing)
        self.assertEqual(merge_translations({}, existing), existing)

    def test_new_scalar_wins(self):
        self.assertEqual(merge_translations({"a": 1}, {"a": 2}), {"a": 2})

    def test_existing_only_keys_are_kept(self):
        self.assertEqual(
            merge_translations({"a": "Hola"}, {"b": "Adiós"}),
            {"a": "Hola", "b": "Adiós"},
        )

    def test_nested_merge(self):
        existing = {"menu": {"open": "Abrir"}, "title": "Título"}
        new = {"menu": {"close": "Cerrar"}}

        self.assertEqual(
            merge_translations(existing, new),
            {"menu": {"open": "Abrir", "close": "Cerrar"}, "title": "Título"},
        )

    def test_nested_merge_over_scalar(self):
        self.assertEqual(
            merge_translations({"menu": "stale"}, {"menu": {"open": "Abrir"}}),
            {"menu": {"open": "Abrir"}},
        )

    def test_existing_is_not_mutated(self):
        existing = {"menu": {"open": "Abrir"}}
        merge_translations(existing, {"menu": {"close": "Cerrar"}, "x": "y"})

        self.assertEqual(existing, {"menu": {"open": "Abrir"}})


class TestPathsAndLocales(unittest.TestCase):
    def test_derive_output_path(self):
        self.assertEqual(
            derive_output_path(Path("dir/input.json"), "es"),
            Path("dir/input_es.json"),
        )

    def test_get_language_name(self):
        self.assertEqual(get_language_name("es"), "Spanish")
        self.assertEqual(get_language_name("de"), "German")
        self.assertEqual(get_language_name("pt-BR"), "Portuguese")
        self.assertEqual(get_language_name("zh-TW"), "Chinese (Traditional)")

    def test_get_language_name_unknown(self):
        with self.assertRaises(ValueError):
            get_language_name("zz")

    def test_describe_locale(self):
        self.assertEqual(describe_locale("fr"), "French (fr)")
        self.assertEqual(describe_locale("zz"), "zz")


if __name__ == "__main__":
    unittest.main()
