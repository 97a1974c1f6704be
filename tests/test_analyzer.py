import pytest

from statetemplate.analyzer import TemplateAnalyzer, remove_duplicates, strip_comments


@pytest.fixture
def analyzer():
    return TemplateAnalyzer()


def test_strip_comments_removes_comment_blocks():
    result = strip_comments("a{{/* hidden note */}}b")
    assert "hidden note" not in result
    assert result == "a" + "b"


def test_strip_comments_keeps_multiline_comment():
    text = "{{/*\nline\n*/}}"
    assert strip_comments(text) == text


def test_remove_duplicates_keeps_first_order():
    assert remove_duplicates(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_direct_references_simple_and_nested(analyzer):
    assert analyzer.direct_field_references("{{.Title}} {{.User.Name}}") == [
        "Title",
        "User.Name",
    ]


def test_direct_references_tolerate_whitespace(analyzer):
    assert analyzer.direct_field_references("{{ .Title }}") == ["Title"]


def test_direct_references_reported_pattern_by_pattern(analyzer):
    assert analyzer.direct_field_references("{{if .A}}{{.B}}") == ["B", "A"]


@pytest.mark.parametrize(
    "text, field",
    [
        ("{{if .Visible}}", "Visible"),
        ("{{range .Items}}", "Items"),
        ("{{with .Profile}}", "Profile"),
        ('{{template "row" .Row}}', "Row"),
        ('{{block "header" .Site.Header}}', "Site.Header"),
        ("{{len .Users}}", "Users"),
    ],
)
def test_direct_references_action_forms(analyzer, text, field):
    assert analyzer.direct_field_references(text) == [field]


def test_extract_variable_assignments(analyzer):
    analyzer.extract_variable_assignments("{{$title := .Title}}{{$name := .User.Name}}")
    assert analyzer.variable_mappings == {"title": "Title", "name": "User.Name"}


def test_variable_usages_map_to_source_field(analyzer):
    analyzer.extract_variable_assignments("{{$title := .Title}}")
    assert analyzer.variable_usages("<h1>{{$title}}</h1>") == ["Title"]


def test_unknown_variable_is_ignored(analyzer):
    assert analyzer.variable_usages("{{$missing}}") == []


def test_field_references_builds_mappings_when_empty(analyzer):
    assert analyzer.field_references("{{$t := .A}}<p>{{$t}}</p>") == ["A"]
    assert analyzer.variable_mappings == {"t": "A"}


def test_field_references_does_not_rebuild_existing_mappings(analyzer):
    analyzer.build_variable_mappings("{{$a := .A}}")
    assert analyzer.field_references("{{$b := .B}}{{$b}}") == []
    assert analyzer.variable_mappings == {"a": "A"}


def test_existing_mappings_used_for_fragments(analyzer):
    analyzer.build_variable_mappings("{{$a := .A}}")
    assert analyzer.field_references_with_existing_mappings("{{$a}}") == ["A"]
    assert TemplateAnalyzer().field_references_with_existing_mappings("{{$a}}") == []


def test_build_variable_mappings_resets(analyzer):
    analyzer.build_variable_mappings("{{$a := .A}}")
    analyzer.build_variable_mappings("{{$b := .B}}")
    assert analyzer.variable_mappings == {"b": "B"}


def test_build_variable_mappings_ignores_commented_assignments(analyzer):
    analyzer.build_variable_mappings("{{/* {{$a := .A}} */}}")
    assert analyzer.variable_mappings == {}


def test_analyze_removes_duplicates(analyzer):
    assert analyzer.analyze("{{.A}}{{.A}}{{if .A}}") == ["A"]


def test_analyze_ignores_commented_references(analyzer):
    assert analyzer.analyze("{{/* {{.Hidden}} */}}{{.Shown}}") == ["Shown"]


def test_analyze_includes_associated_templates(analyzer):
    deps = analyzer.analyze("{{$v := .X}}", ["{{$v}}", "{{.Y}}"])
    assert deps == ["X", "Y"]


def test_analyze_none_yields_nothing(analyzer):
    assert analyzer.analyze(None) == []


def test_analyze_result_is_subset_of_references(analyzer):
    text = "<p>{{.A}}</p>{{range .Items}}{{len .Items}}{{end}}"
    deps = analyzer.analyze(text)
    assert set(deps) == set(analyzer.direct_field_references(text))
    assert len(deps) == len(set(deps))