import unittest

import pytest

from plainioc import CircularDependencyError, Container, FactoryNotBoundError, Token


class TestCircularDependencyDetection(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container(circular_dependency_detect=True)

    def test_self_dependency_raises(self):
        self.cont.bind("a", lambda c: c.resolve("a"))

        with pytest.raises(CircularDependencyError) as ctx:
            self.cont.resolve("a")

        msg = str(ctx.value)
        assert msg.startswith('Circular dependency detected while resolving "a" (str)')
        assert '[0] "a" (str)' in msg
        assert '[1] "a" (str)' in msg

    def test_transitive_dependency_raises_with_full_stack(self):
        self.cont.bind("a", lambda c: c.resolve("b"))
        self.cont.bind("b", lambda c: c.resolve("a"))

        with pytest.raises(CircularDependencyError) as ctx:
            self.cont.resolve("a")

        lines = str(ctx.value).splitlines()
        assert lines[1:] == [
            "Resolution stack:",
            '  [0] "a" (str)',
            '  [1] "b" (str)',
            '  [2] "a" (str)',
        ]

    def test_singleton_cycle_raises(self):
        service = Token("service")
        self.cont.bind_singleton(service, lambda c: c.resolve("repo"))
        self.cont.bind_singleton("repo", lambda c: c.resolve(service))

        with pytest.raises(CircularDependencyError) as ctx:
            self.cont.resolve("repo")
        assert '"Token(service)" (token)' in str(ctx.value)

    def test_stack_is_empty_after_cycle(self):
        self.cont.bind("a", lambda c: c.resolve("a"))
        self.cont.bind("b", lambda _: 42)

        with pytest.raises(CircularDependencyError):
            self.cont.resolve("a")

        assert self.cont._resolution_stack == []  # noqa: SLF001
        assert self.cont.resolve("b") == 42

    def test_stack_is_empty_after_factory_error(self):
        def broken(_):
            msg = "boom"
            raise ValueError(msg)

        self.cont.bind("a", lambda c: c.resolve("broken"))
        self.cont.bind("broken", broken)

        with pytest.raises(ValueError, match="boom"):
            self.cont.resolve("a")
        assert self.cont._resolution_stack == []  # noqa: SLF001

    def test_stack_is_empty_after_unbound_sub_dependency(self):
        self.cont.bind("a", lambda c: c.resolve("missing"))

        with pytest.raises(FactoryNotBoundError):
            self.cont.resolve("a")
        assert self.cont._resolution_stack == []  # noqa: SLF001

    def test_same_key_resolved_twice_in_sequence_is_not_a_cycle(self):
        self.cont.bind("leaf", lambda _: 1)
        self.cont.bind("pair", lambda c: (c.resolve("leaf"), c.resolve("leaf")))

        assert self.cont.resolve("pair") == (1, 1)

    def test_diamond_is_not_a_cycle(self):
        self.cont.bind("base", lambda _: "base")
        self.cont.bind("left", lambda c: c.resolve("base") + "-left")
        self.cont.bind("right", lambda c: c.resolve("base") + "-right")
        self.cont.bind("top", lambda c: (c.resolve("left"), c.resolve("right")))

        assert self.cont.resolve("top") == ("base-left", "base-right")


def test_detection_disabled_by_default_allows_bounded_recursion():
    c = Container()
    depth = []

    def countdown(cont: Container):
        depth.append(1)
        if len(depth) < 50:
            return cont.resolve("countdown")
        return len(depth)

    c.bind("countdown", countdown)

    assert c.resolve("countdown") == 50
    assert c._resolution_stack == []  # noqa: SLF001


def test_detection_disabled_unbounded_recursion_is_not_a_circular_error():
    c = Container()
    c.bind("a", lambda cont: cont.resolve("a"))

    with pytest.raises(RecursionError):
        c.resolve("a")
