from ._core.bidirectional import BiMap, ReversedBiMap
from ._core.canon import (
    CanonMap,
    Canonizer,
    JsonCanonMap,
    SelfCanonMap,
    canonize_by_pick,
    json_canonize,
    naive_canonize,
)
from ._core.collect import (
    Bumper,
    Entries,
    ErrorSpec,
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
    reverse_map,
    select_map,
    uniform_map,
    values_of,
)
from ._core.common.event import Event, EventListener
from ._core.common.option import Absent, Option, Some, absent
from ._core.deep import (
    DeepMap,
    deep_accumulate,
    deep_accumulate_into,
    deep_collect,
    deep_collect_into,
    deep_folding_get,
    deep_get,
    deep_get_or_else,
    deep_get_or_fail,
    deep_get_or_val,
    deep_has,
    deep_map_stream,
    deep_map_to_dictionary,
    squeeze_deep_map,
)
from ._core.eventual import (
    EntryAdded,
    EntryBumped,
    EntryDropped,
    EntryReconciled,
    EntryRemoved,
    EventualMap,
    EventualMapEvent,
    MapFinalized,
    stream_collect,
    stream_collect_into,
)
from ._core.reconcile import (
    Reconciler,
    reconcile_add,
    reconcile_append,
    reconcile_concat,
    reconcile_count,
    reconcile_default,
    reconcile_first,
    reconcile_fold,
)

__all__ = (
    "Absent",
    "BiMap",
    "Bumper",
    "CanonMap",
    "Canonizer",
    "DeepMap",
    "Entries",
    "EntryAdded",
    "EntryBumped",
    "EntryDropped",
    "EntryReconciled",
    "EntryRemoved",
    "ErrorSpec",
    "Event",
    "EventListener",
    "EventualMap",
    "EventualMapEvent",
    "JsonCanonMap",
    "MapFinalized",
    "Option",
    "Reconciler",
    "ReversedBiMap",
    "SelfCanonMap",
    "Some",
    "absent",
    "accumulate",
    "accumulate_into",
    "canonize_by_pick",
    "collect",
    "collect_bimap",
    "collect_bumping",
    "collect_into",
    "deep_accumulate",
    "deep_accumulate_into",
    "deep_collect",
    "deep_collect_into",
    "deep_folding_get",
    "deep_get",
    "deep_get_or_else",
    "deep_get_or_fail",
    "deep_get_or_val",
    "deep_has",
    "deep_map_stream",
    "deep_map_to_dictionary",
    "flat_make_entries",
    "folding_get",
    "get_or_else",
    "get_or_fail",
    "get_or_val",
    "invert_bin_map",
    "json_canonize",
    "keys_of",
    "make_entries",
    "map_to_dictionary",
    "map_values",
    "naive_canonize",
    "reconcile_add",
    "reconcile_append",
    "reconcile_concat",
    "reconcile_count",
    "reconcile_default",
    "reconcile_first",
    "reconcile_fold",
    "reverse_map",
    "select_map",
    "squeeze_deep_map",
    "stream_collect",
    "stream_collect_into",
    "uniform_map",
    "values_of",
)
