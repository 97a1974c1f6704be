# statetemplate

Tools for working with `{{ ... }}` style HTML templates:

- find out which data fields a template reads, so a change to the data can be
  matched to the parts of a page that need re-rendering;
- cut a template into small fragments, one per template expression, each
  given a short random ID and replaced in the page by a call to that fragment.

The package has no runtime dependencies.

## Installation

```
pip install .
```

## Finding field dependencies

```python
from statetemplate.analyzer import TemplateAnalyzer

analyzer = TemplateAnalyzer()
deps = analyzer.analyze(
    "{{$title := .Title}}<h1>{{$title}}</h1><p>{{.User.Name}}</p>",
    [],
)
# ['User.Name', 'Title']
```

`analyze(template_text, associated_texts)` takes the text of the main
template and the texts of any templates defined alongside it. It records
variable assignments such as `{{$title := .Title}}` in
`analyzer.variable_mappings`, so a later `{{$title}}` counts as a use of
`Title`. Direct references (`{{.Field}}`, `{{if .Field}}`,
`{{range .Field}}`, `{{with .Field}}`, `{{template "name" .Field}}`,
`{{block "name" .Field}}` and `len .Field`) are all found. Comments written
on one line as `{{/* ... */}}` are ignored. Each field appears once in the
result, in the order it was first found.

The lower-level steps are available on their own: `build_variable_mappings`,
`field_references`, `field_references_with_existing_mappings`,
`extract_variable_assignments`, `direct_field_references` and
`variable_usages`. The module also provides `strip_comments` and
`remove_duplicates`.

## Extracting fragments

```python
from statetemplate.fragments import FragmentExtractor

extractor = FragmentExtractor()
fragments, page = extractor.extract_fragments("<div><h1>{{.Title}}</h1></div>")
# page == '<div><h1>{{template "k3x9q2" .}}</h1></div>'  (the ID is random)
# fragments[0].content == "{{.Title}}"
# fragments[0].dependencies == ["Title"]
```

Each `TemplateFragment` carries its `id` (six lower-case letters or digits),
its `content`, the field `dependencies` found in it, and the `start_pos` and
`end_pos` it occupied in the text that was passed in.

`FragmentExtractor` accepts an optional `analyzer` (a `TemplateAnalyzer`
whose existing variable mappings are used for fragment dependencies) and an
`id_factory` callable for producing fragment IDs, which defaults to
`generate_random_id`.

`named_templates(name, template_content)` returns a mapping from template
name to template text: the rewritten page under `name` and every fragment
under its own ID, ready to load into a template engine that supports named
templates. It also returns the list of fragments.

`find_fragment_start`, `find_fragment_end` and
`replace_fragments_with_calls` expose the individual steps of extraction.

`generate_random_id()` produces a fresh six-character fragment ID.

## What this package does not do

It does not parse or execute templates: dependencies are found by pattern
matching on the template text, and no HTML is rendered. There is no renderer,
no stream of live updates and no command-line tool; the results are plain
Python lists, dictionaries and strings for another component to use.

## Running the tests

```
pip install .[test]
pytest
```