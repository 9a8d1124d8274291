from mapkit.exceptions import (
    BumpLimitError,
    DeepLookupError,
    MapkitError,
    NoEntry,
    ResolverCaptureError,
)


class TestExceptions:
    def test_no_entry_with_default_message_quote_key(self):
        exception = NoEntry(42)

        assert str(exception) == 'Map has no entry "42"'
        assert exception.key == 42
        assert isinstance(exception, KeyError)
        assert isinstance(exception, MapkitError)

    def test_no_entry_with_message_keep_message(self):
        assert str(NoEntry("a", "Custom")) == "Custom"

    def test_deep_lookup_error_with_default_message_list_keys(self):
        exception = DeepLookupError(["a", "b"], ["a"])

        assert str(exception) == (
            "Deep lookup failed on keys [a, b], keys matched were [a]"
        )
        assert exception.key == ("a", "b")
        assert exception.matched == ("a",)

    def test_errors_with_success_share_base_class(self):
        assert issubclass(BumpLimitError, MapkitError)
        assert issubclass(ResolverCaptureError, MapkitError)
