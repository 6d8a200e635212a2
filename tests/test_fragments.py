"""Tests for curl_auth.fragments module."""

import dataclasses

import pytest

from curl_auth.fragments import AuthFragment, flatten_fragments, merge_fragments


class TestAuthFragment:
    """Tests for AuthFragment dataclass."""

    def test_empty_fragment(self):
        fragment = AuthFragment()
        assert fragment.headers == ()
        assert fragment.params == ()
        assert fragment.options == ()

    def test_to_dict_omits_empty_fields(self):
        fragment = AuthFragment(params=("access_token=string",))

        assert fragment.to_dict() == {"params": ["access_token=string"]}
        assert AuthFragment().to_dict() == {}

    def test_merge_keeps_order(self):
        first = AuthFragment(headers=('-H "A: 1"',), options=("--user u:p",))
        second = AuthFragment(headers=('-H "B: 2"',), params=("x=1",), options=("--digest",))

        merged = first.merge(second)

        assert merged.headers == ('-H "A: 1"', '-H "B: 2"')
        assert merged.params == ("x=1",)
        assert merged.options == ("--user u:p", "--digest")

    def test_is_immutable(self):
        fragment = AuthFragment()

        with pytest.raises(dataclasses.FrozenInstanceError):
            fragment.headers = ("x",)


class TestMergeFragments:
    def test_empty_input_gives_empty_fragment(self):
        assert merge_fragments([]) == AuthFragment()

    def test_folds_in_order(self):
        fragments = [
            AuthFragment(params=("a=1",)),
            AuthFragment(),
            AuthFragment(params=("b=2",)),
        ]

        assert merge_fragments(fragments) == AuthFragment(params=("a=1", "b=2"))


class TestFlattenFragments:
    def test_concatenates_groups(self):
        groups = [
            [AuthFragment(headers=("h1",)), AuthFragment(params=("p1",))],
            [],
            [AuthFragment(options=("o1",))],
        ]

        assert flatten_fragments(groups) == [
            AuthFragment(headers=("h1",)),
            AuthFragment(params=("p1",)),
            AuthFragment(options=("o1",)),
        ]
