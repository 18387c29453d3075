import pytest

from apekit.components import ComponentType
from apekit.context import CompilationContext, check_optional_string


@pytest.mark.parametrize("src", [None, "", "   ", "\t\n"])
def test_blank_values_are_absent(src):
    assert check_optional_string(src) is None


@pytest.mark.parametrize("src", ["Username", "  padded  "])
def test_present_values_returned_unchanged(src):
    assert check_optional_string(src) == src


def test_context_defaults_describe_a_child_without_parent():
    ctx = CompilationContext()
    assert ctx.is_root is False
    assert ctx.name is None
    assert ctx.parent_id is None
    assert ctx.component_type == ""


def test_context_holds_given_values():
    ctx = CompilationContext(
        component_type=ComponentType.PROP, name="Username", is_root=True
    )
    ctx.parent_id = "objects.Todo"
    assert ctx.component_type == ComponentType.PROP
    assert ctx.name == "Username"
    assert ctx.parent_id == "objects.Todo"