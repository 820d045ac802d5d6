"""Unit tests for derived-name rules (bundle_creator.naming)."""

from __future__ import annotations

import pytest

from bundle_creator import naming


class TestCasing:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("my_custom name-space", "MyCustomNameSpace"),
            ("contao-bundle-creator-bundle", "ContaoBundleCreatorBundle"),
            ("acme", "Acme"),
            ("ACME", "Acme"),
            ("  demo--bundle!! ", "DemoBundle"),
            ("", ""),
        ],
    )
    def test_as_class_name(self, raw, expected):
        assert naming.as_class_name(raw) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("My custom module", "my_custom_module"),
            ("my-custom__module", "my_custom_module"),
            ("Teaser", "teaser"),
        ],
    )
    def test_as_snake_case(self, raw, expected):
        assert naming.as_snake_case(raw) == expected

    @pytest.mark.unit
    def test_strip_suffix(self):
        assert naming.strip_suffix("DemoBundle", "Bundle") == "Demo"
        assert naming.strip_suffix("Demo", "Bundle") == "Demo"
        assert naming.strip_suffix("Demo", "") == "Demo"


class TestDcaNames:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("tl_sample_table", "tl_sample_table"),
            ("Sample Table", "tl_sample_table"),
            ("My-Table__", "tl_my_table"),
            ("TL_Demo", "tl_demo"),
            ("_demo_", "tl_demo"),
        ],
    )
    def test_as_dca_table(self, raw, expected):
        assert naming.as_dca_table(raw) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["tl_", "tl", "__", "?"])
    def test_prefix_alone_is_not_doubled(self, raw):
        stem = naming.dca_table_stem(raw)
        assert not stem.startswith("tl_")
        assert naming.as_dca_table(raw) == "tl_" + stem

    @pytest.mark.unit
    def test_empty_stem(self):
        assert naming.dca_table_stem("tl_") == ""
        assert naming.dca_table_stem("tl_!!") == ""

    @pytest.mark.unit
    def test_as_model_class_name(self):
        assert naming.as_model_class_name("tl_sample_table") == "SampleTableModel"
        assert naming.as_model_class_name("demo") == "DemoModel"


class TestFrontendModuleNames:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw", ["my custom", "My Custom Module", "Module My Custom", "my_custom_module"]
    )
    def test_type_is_normalised(self, raw):
        assert naming.as_frontend_module_type(raw) == "my_custom_module"

    @pytest.mark.unit
    def test_class_and_template(self):
        assert naming.as_frontend_module_class_name("my custom") == "MyCustomModuleController"
        assert naming.as_frontend_module_template_name("my custom") == "mod_my_custom"

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["module", "Module", "mod", "!!!"])
    def test_boundary_tokens_only_leave_no_stem(self, raw):
        assert naming.frontend_module_stem(raw) == ""


class TestContentElementNames:
    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["teaser", "Element Teaser", "teaser element", "ce_teaser"])
    def test_type_is_normalised(self, raw):
        assert naming.as_content_element_type(raw) == "teaser_element"

    @pytest.mark.unit
    def test_class_and_template(self):
        assert naming.as_content_element_class_name("teaser") == "TeaserElementController"
        assert naming.as_content_element_template_name("teaser") == "ce_teaser"

    @pytest.mark.unit
    def test_boundary_tokens_only_leave_no_stem(self):
        assert naming.content_element_stem("ce") == ""
        assert naming.content_element_stem("Element") == ""


class TestBundleNames:
    @pytest.mark.unit
    def test_extension_class_name(self):
        assert naming.as_dependency_injection_extension_class_name("acme", "demo-bundle") == "AcmeDemoExtension"
        assert naming.as_dependency_injection_extension_class_name("acme", "demo") == "AcmeDemoExtension"

    @pytest.mark.unit
    def test_twig_namespace(self):
        assert naming.as_twig_namespace("acme", "demo-bundle") == "@AcmeDemo"

    @pytest.mark.unit
    def test_route_id(self):
        assert naming.as_route_id("Acme", "demo-bundle") == "acme_demo"
        assert naming.as_route_id("acme", "news-reader") == "acme_news_reader"

    @pytest.mark.unit
    def test_header_comment(self):
        assert naming.as_header_comment("a\n\nb\n") == "/*\n * a\n *\n * b\n */"
