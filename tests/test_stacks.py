"""Tests for the nesting stacks used by the writer."""

from rich.style import Style

from thoth.preview.stacks import BlockContext, BlockContextStack, LinkBuffer, ListStack, StyleStack
from thoth.preview.text import StyledSpan


class TestStyleStack:
    def test_empty_stack_uses_default_style(self):
        assert StyleStack().current == Style()

    def test_push_composes_onto_top(self):
        stack = StyleStack()
        stack.push(Style(bold=True, color="red"))
        stack.push(Style(italic=True))
        assert stack.current.bold is True
        assert stack.current.italic is True
        assert stack.current.color.name == "red"

    def test_inner_color_overrides(self):
        stack = StyleStack()
        stack.push(Style(color="red"))
        stack.push(Style(color="blue"))
        assert stack.current.color.name == "blue"

    def test_pop_removes_only_top(self):
        stack = StyleStack()
        stack.push(Style(bold=True))
        stack.push(Style(italic=True))
        stack.pop()
        assert stack.current.bold is True
        assert stack.current.italic is None
        assert len(stack) == 1

    def test_pop_on_empty_is_noop(self):
        stack = StyleStack()
        assert stack.pop() is None
        assert stack.pop() is None
        assert len(stack) == 0


class TestBlockContextStack:
    def test_prefixes_outer_to_inner(self):
        stack = BlockContextStack()
        stack.push(BlockContext(StyledSpan("a"), Style(color="red")))
        stack.push(BlockContext(StyledSpan("b"), Style(color="blue")))
        assert [prefix.text for prefix in stack.prefixes] == ["a", "b"]
        assert stack.innermost_prefix.text == "b"
        assert stack.line_style.color.name == "blue"

    def test_pop_restores_outer_context(self):
        stack = BlockContextStack()
        stack.push(BlockContext(StyledSpan("a"), Style(color="red")))
        stack.push(BlockContext(StyledSpan("b"), Style(color="blue")))
        stack.pop()
        assert stack.line_style.color.name == "red"
        assert stack.depth == 1

    def test_prefix_and_style_pushed_separately(self):
        stack = BlockContextStack()
        stack.push_line_style(Style(color="red"))
        assert stack.prefixes == []
        stack.push_prefix(StyledSpan("|"))
        assert stack.pop_prefix().text == "|"
        assert stack.line_style.color.name == "red"

    def test_underflow_is_noop(self):
        stack = BlockContextStack()
        assert stack.pop() == BlockContext(None, None)
        assert stack.pop_prefix() is None
        assert stack.pop_line_style() is None
        assert stack.line_style == Style()
        assert stack.innermost_prefix is None


class TestListStack:
    def test_unordered_has_no_number(self):
        stack = ListStack()
        stack.push(None)
        assert stack.next_number() is None
        assert stack.depth == 1

    def test_ordered_counts_up(self):
        stack = ListStack()
        stack.push(3)
        assert [stack.next_number() for _ in range(3)] == [3, 4, 5]

    def test_nested_counters_are_independent(self):
        stack = ListStack()
        stack.push(1)
        stack.next_number()
        stack.push(7)
        assert stack.next_number() == 7
        stack.pop()
        assert stack.next_number() == 2

    def test_pop_on_empty_is_noop(self):
        stack = ListStack()
        stack.pop()
        assert stack.is_empty()
        assert stack.next_number() is None


class TestLinkBuffer:
    def test_take_clears(self):
        buffer = LinkBuffer()
        buffer.set("http://x.org")
        assert buffer.take() == "http://x.org"
        assert buffer.take() is None

    def test_clear(self):
        buffer = LinkBuffer()
        buffer.set("a")
        buffer.clear()
        assert buffer.take() is None
