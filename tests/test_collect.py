import pytest

from mapkit import (
    BiMap,
    absent,
    accumulate,
    accumulate_into,
    collect,
    collect_bimap,
    collect_bumping,
    collect_into,
    flat_make_entries,
    folding_get,
    get_or_else,
    get_or_fail,
    get_or_val,
    invert_bin_map,
    keys_of,
    make_entries,
    map_to_dictionary,
    map_values,
    reconcile_append,
    reconcile_count,
    reverse_map,
    select_map,
    uniform_map,
    values_of,
)
from mapkit.exceptions import BumpLimitError, NoEntry


class TestCollect:
    """
    collect
    """

    def test_collect_without_reconciler_keep_last_value(self):
        assert collect([("a", 7), ("b", 8), ("a", 65)]) == {"a": 65, "b": 8}

    def test_collect_with_mapping_return_copy(self):
        mapping = {"a": 1}
        result = collect(mapping)

        assert result == mapping
        assert result is not mapping

    def test_collect_with_generator_consume_once(self):
        entries = ((str(i), i) for i in range(3))
        assert collect(entries) == {"0": 0, "1": 1, "2": 2}

    def test_collect_with_reconciler_call_reconciler_for_every_entry(self):
        calls = []

        def reconciler(colliding, incoming, key):
            calls.append((colliding, incoming, key))
            return incoming

        collect([("a", 1), ("a", 2)], reconciler)
        assert calls == [(absent, 1, "a"), (1, 2, "a")]

    def test_collect_with_absent_reconciled_remove_key(self):
        def reconciler(colliding, incoming, key):
            return absent if incoming is None else incoming

        result = collect([("a", 1), ("b", 2), ("a", None), ("c", None)], reconciler)
        assert result == {"b": 2}

    def test_collect_with_none_reconciled_keep_none(self):
        result = collect([("a", 1)], lambda *_: None)
        assert result == {"a": None}

    """
    collect_into
    """

    def test_collect_into_with_seed_return_seed(self):
        seed = {"a": 1}
        result = collect_into([("b", 2)], seed)

        assert result is seed
        assert seed == {"a": 1, "b": 2}

    def test_collect_into_with_reconciler_see_seed_values(self):
        seed = {"a": 10}
        collect_into([("a", 1), ("b", 1)], seed, lambda c, i, k: (c or 0) + i)

        assert seed == {"a": 11, "b": 1}

    """
    collect_bimap
    """

    def test_collect_bimap_with_success_return_bimap(self):
        result = collect_bimap([("a", 1), ("b", 2)])

        assert isinstance(result, BiMap)
        assert result.get_key(2) == "b"

    def test_collect_bimap_with_duplicate_values_keep_last_key(self):
        result = collect_bimap([("a", 1), ("b", 1)])

        assert dict(result) == {"b": 1}
        assert result.get_key(1) == "b"


class TestCollectBumping:
    def test_collect_bumping_with_duplicate_keys_write_under_bumped_key(self):
        result = collect_bumping(
            [("A", "me"), ("A", "it")],
            lambda key, *_: f"{key}_bumped",
        )
        assert result == {"A": "me", "A_bumped": "it"}

    def test_collect_bumping_with_attempts_pass_attempt_count(self):
        result = collect_bumping(
            [("k", 1), ("k", 2), ("k", 3)],
            lambda candidate, attempts, key, *_: f"{key}{attempts}",
        )
        assert result == {"k": 1, "k1": 2, "k2": 3}

    def test_collect_bumping_with_none_drop_entry(self):
        result = collect_bumping([("A", 1), ("A", 2)], lambda *_: None)
        assert result == {"A": 1}

    def test_collect_bumping_with_seed_never_overwrite(self):
        seed = {"A": 0}
        result = collect_bumping([("A", 1)], lambda key, *_: key.lower(), seed)

        assert result is seed
        assert seed == {"A": 0, "a": 1}

    def test_collect_bumping_with_max_attempts_raise_bump_limit_error(self):
        with pytest.raises(BumpLimitError):
            collect_bumping(
                [("A", 1), ("A", 2)],
                lambda key, *_: key,
                max_attempts=5,
            )


class TestEntries:
    """
    make_entries
    """

    def test_make_entries_with_success_pair_key_and_value(self):
        result = list(make_entries(["ab", "c"], len))
        assert result == [(2, "ab"), (1, "c")]

    def test_make_entries_with_none_key_skip_value(self):
        result = list(make_entries([1, 2, 3], lambda n: n if n % 2 else None))
        assert result == [(1, 1), (3, 3)]

    def test_make_entries_with_mapper_map_value(self):
        result = list(make_entries(["ab"], len, lambda value, key: value * key))
        assert result == [(2, "abab")]

    """
    flat_make_entries
    """

    def test_flat_make_entries_with_success_flatten_entries(self):
        result = list(flat_make_entries(["ab"], lambda s: ((c, s) for c in s)))
        assert result == [("a", "ab"), ("b", "ab")]

    """
    accumulate
    """

    def test_accumulate_with_reconciler_group_values(self):
        result = accumulate(range(6), lambda n: n % 2, reconcile_append())
        assert result == {0: [0, 2, 4], 1: [1, 3, 5]}

    def test_accumulate_into_with_seed_return_seed(self):
        seed = {"x": 5}
        result = accumulate_into("xyx", seed, lambda c: c, reconcile_count())

        assert result is seed
        assert seed == {"x": 5 + 2, "y": 1}

    """
    helpers
    """

    def test_reverse_map_with_success_swap_entries(self):
        assert dict(reverse_map({"a": 1, "b": 2})) == {1: "a", 2: "b"}

    def test_map_values_with_success_map_value_and_key(self):
        result = dict(map_values({"a": 1, "b": 2}, lambda value, key: key * value))
        assert result == {"a": "a", "b": "bb"}

    def test_keys_of_with_success_return_keys(self):
        assert list(keys_of([("a", 1), ("b", 2)])) == ["a", "b"]

    def test_values_of_with_success_return_values(self):
        assert list(values_of({"a": 1, "b": 2})) == [1, 2]

    def test_uniform_map_with_success_map_every_key_to_value(self):
        assert dict(uniform_map("ab", 0)) == {"a": 0, "b": 0}

    def test_select_map_with_predicate_keep_matching_entries(self):
        result = dict(select_map({"a": 1, "b": 2, "c": 3}, lambda v, k: v % 2 == 1))
        assert result == {"a": 1, "c": 3}

    def test_invert_bin_map_with_success_invert_bins(self):
        result = invert_bin_map({"odd": [1, 3], "prime": [2, 3]})
        assert result == {1: ["odd"], 3: ["odd", "prime"], 2: ["prime"]}

    def test_map_to_dictionary_with_stringifier_stringify_keys(self):
        assert map_to_dictionary({1: "a"}) == {"1": "a"}
        assert map_to_dictionary({1: "a"}, lambda k: f"#{k}") == {"#1": "a"}


class TestLookups:
    """
    folding_get
    """

    def test_folding_get_with_present_key_call_if_present(self):
        result = folding_get({"a": 1}, "a", lambda value, key: (key, value))
        assert result == ("a", 1)

    def test_folding_get_with_missing_key_call_if_absent(self):
        result = folding_get({}, "a", lambda *_: "found", lambda key: f"no {key}")
        assert result == "no a"

    def test_folding_get_without_if_absent_return_none(self):
        assert folding_get({}, "a", lambda *_: "found") is None

    """
    get_or_val / get_or_else
    """

    def test_get_or_val_with_none_value_return_none(self):
        assert get_or_val({"a": None}, "a", 0) is None
        assert get_or_val({}, "a", 0) == 0

    def test_get_or_else_with_missing_key_call_substitute(self):
        assert get_or_else({"a": 1}, "a", lambda key: 0) == 1
        assert get_or_else({}, "a", lambda key: key.upper()) == "A"

    """
    get_or_fail
    """

    def test_get_or_fail_with_present_key_return_value(self):
        assert get_or_fail({"a": 1}, "a") == 1

    def test_get_or_fail_with_missing_key_raise_no_entry(self):
        with pytest.raises(NoEntry) as exc_info:
            get_or_fail({}, "a")

        assert str(exc_info.value) == 'Map has no entry "a"'
        assert exc_info.value.key == "a"

    def test_get_or_fail_with_missing_key_raise_key_error(self):
        with pytest.raises(KeyError):
            get_or_fail({}, "a")

    def test_get_or_fail_with_message_raise_no_entry_with_message(self):
        with pytest.raises(NoEntry, match="^Nope$"):
            get_or_fail({}, "a", "Nope")

    def test_get_or_fail_with_callable_raise_built_error(self):
        with pytest.raises(NoEntry, match="^No a here$"):
            get_or_fail({}, "a", lambda key: f"No {key} here")

        with pytest.raises(ValueError, match="a"):
            get_or_fail({}, "a", lambda key: ValueError(key))

    def test_get_or_fail_with_exception_raise_exception(self):
        exception = LookupError()

        with pytest.raises(LookupError) as exc_info:
            get_or_fail({}, "a", exception)

        assert exc_info.value is exception
