"""
Tests for PaginatedAccumulator merge rules.
"""

import pytest

from twitter_api_core.paginators.accumulator import PaginatedAccumulator, read_page


class TestReadPage:

    def test_missing_parts(self):
        view = read_page({})
        assert view.items == []
        assert view.result_count == 0
        assert view.next_token is None
        assert view.includes == {}

    @pytest.mark.parametrize("page", [
        "text", None, [1, 2], {"meta": "x"}, {"includes": ["x"]}, {"data": {"id": "1", "name": "x"}}, {"data": "abc"},
    ])
    def test_malformed(self, page):
        with pytest.raises(TypeError):
            read_page(page)


class TestFromPage:

    def test_initial_state(self, page_factory):
        acc = PaginatedAccumulator.from_page(page_factory([1, 2], next_token="a", includes={"tweets": [{"id": "t1"}]}))

        assert acc.data == [1, 2]
        assert acc.result_count == 2
        assert acc.next_token == "a"
        assert acc.previous_token is None
        assert acc.includes == {"tweets": [{"id": "t1"}]}
        assert len(acc) == 2

    def test_page_not_aliased(self, page_factory):
        page = page_factory([1])
        acc = PaginatedAccumulator.from_page(page)
        acc.merge(page_factory([2]))
        assert page["data"] == [1]

    def test_empty_accumulator(self):
        acc = PaginatedAccumulator()
        assert acc.data == []
        assert acc.result_count == 0
        assert acc.next_token is None


class TestMerge:

    def test_forward_appends(self, page_factory):
        acc = PaginatedAccumulator.from_page(page_factory([1, 2], next_token="a"))
        acc.merge(page_factory([3]), forward=True)

        assert acc.data == [1, 2, 3]
        assert acc.result_count == 3
        assert acc.next_token is None

    def test_forward_keeps_previous_token(self, page_factory):
        acc = PaginatedAccumulator.from_page(page_factory([1], next_token="n", previous_token="p"))
        acc.merge(page_factory([2], next_token="n2", previous_token="other"), forward=True)

        assert acc.previous_token == "p"
        assert acc.next_token == "n2"

    def test_dict_data_rejected_before_mutation(self, page_factory):
        acc = PaginatedAccumulator.from_page(page_factory([1], next_token="a"))

        with pytest.raises(TypeError):
            acc.merge({"data": {"id": "2"}, "meta": {"result_count": 1, "next_token": "b"}})

        assert acc.data == [1]
        assert acc.next_token == "a"
        assert acc.result_count == 1

    def test_backward_prepends(self, page_factory):
        acc = PaginatedAccumulator.from_page(page_factory([3, 4], previous_token="p", next_token="n"))
        acc.merge(page_factory([1, 2], previous_token="p0"), forward=False)

        assert acc.data == [1, 2, 3, 4]
        assert acc.previous_token == "p0"
        assert acc.next_token == "n"
        assert acc.result_count == 4

    def test_includes_concatenated_without_dedup(self, page_factory):
        user = {"id": "u1"}
        acc = PaginatedAccumulator.from_page(page_factory([1], next_token="a", includes={"users": [user]}))
        acc.merge(page_factory([2], includes={"users": [user], "tweets": [{"id": "t"}]}))

        assert acc.includes == {"users": [user, user], "tweets": [{"id": "t"}]}

    def test_malformed_page_leaves_state(self, page_factory):
        acc = PaginatedAccumulator.from_page(page_factory([1], next_token="a"))

        with pytest.raises(TypeError):
            acc.merge({"data": [2], "meta": {"result_count": 1}, "includes": ["bad"]})

        assert acc.data == [1]
        assert acc.result_count == 1
        assert acc.next_token == "a"

    def test_merge_returns_view(self, page_factory):
        acc = PaginatedAccumulator()
        view = acc.merge(page_factory([1, 2], next_token="z"))
        assert view.items == [1, 2]
        assert view.next_token == "z"

    def test_result_count_added_in_both_directions(self, page_factory):
        acc = PaginatedAccumulator.from_page(page_factory([2], next_token="n", previous_token="p"))
        acc.merge(page_factory([3]), forward=True)
        acc.merge(page_factory([1]), forward=False)
        assert acc.result_count == 3
