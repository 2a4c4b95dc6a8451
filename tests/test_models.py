import io

import pytest
from pydantic import ValidationError as ModelValidationError

from html5tag.attributes import Attributes
from html5tag.config import load_attributes, load_render_options
from html5tag.errors import ValidationError
from html5tag.models import RenderOptions, TagRenderRequest
from html5tag.tag import render_request, write_request


def test_render_options_aliases() -> None:
    options = RenderOptions.model_validate({"sortAttributes": True, "noSpace": True})
    assert options.sort_attributes
    assert options.no_space
    assert not options.pretty_print
    assert RenderOptions(pretty_print=True).pretty_print


def test_formatted_options() -> None:
    options = RenderOptions.formatted()
    assert options.sort_attributes and options.pretty_print
    assert not options.no_space


def test_request_coerces_mapping_attributes() -> None:
    request = TagRenderRequest(tag="div", attributes={"data-testCase": "x", "style": "width: 4"})
    assert isinstance(request.attributes, Attributes)
    assert dict(request.attributes) == {"data-test-case": "x", "style": "width:4px"}


def test_request_rejects_bad_attributes() -> None:
    with pytest.raises(ModelValidationError):
        TagRenderRequest(tag="div", attributes={"id": "two words"})


@pytest.mark.parametrize("tag", ["", "my tag", "<div>", "a/b"])
def test_request_rejects_bad_tag_names(tag: str) -> None:
    with pytest.raises(ModelValidationError):
        TagRenderRequest(tag=tag)


def test_void_defaults_to_known_void_tags() -> None:
    assert TagRenderRequest(tag="img").void
    assert not TagRenderRequest(tag="div").void
    assert TagRenderRequest(tag="my-widget", isVoid=True).void


def test_void_request_rejects_content() -> None:
    with pytest.raises(ModelValidationError):
        TagRenderRequest(tag="br", content="x")
    with pytest.raises(ModelValidationError):
        TagRenderRequest(tag="div", is_void=True, content="x")


def test_render_request() -> None:
    request = TagRenderRequest(
        tag="div",
        attributes=Attributes({"z": "1", "id": "main"}),
        content="<p>hi</p>",
        options=RenderOptions.formatted(),
    )
    assert render_request(request) == '<div id="main" z="1">\n  <p>hi</p>\n</div>'


def test_write_request_options_apply_independently() -> None:
    request = TagRenderRequest(
        tag="span",
        attributes=Attributes({"z": "1", "id": "main"}),
        content="hi",
        options=RenderOptions(sort_attributes=True, no_space=True),
    )
    buffer = io.StringIO()
    assert write_request(buffer, request) == len(buffer.getvalue())
    assert buffer.getvalue() == '<span id="main" z="1">hi</span>'


def test_load_render_options() -> None:
    options = load_render_options("sortAttributes: true\nprettyPrint: true\n")
    assert options == RenderOptions.formatted()
    assert load_render_options("") == RenderOptions()


def test_load_render_options_rejects_non_mapping() -> None:
    with pytest.raises(ValidationError):
        load_render_options("- a\n- b\n")
    with pytest.raises(ModelValidationError):
        load_render_options("sortAttributes: [1, 2]")


def test_load_attributes() -> None:
    attrs = load_attributes(
        "{id: main, class: box wide, disabled: true, hidden: false, required: null, width: 10, data-testCase: x}"
    )
    assert dict(attrs) == {
        "id": "main",
        "class": "box wide",
        "disabled": "",
        "required": "",
        "width": "10",
        "data-test-case": "x",
    }
    assert attrs.sorted_string() == 'id="main" class="box wide" width="10" data-test-case="x" disabled required'


def test_load_attributes_validates() -> None:
    with pytest.raises(ValidationError):
        load_attributes("{id: two words}")
    with pytest.raises(ValidationError):
        load_attributes("just text")
