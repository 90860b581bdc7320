#
# Attrcodec - Byte Quantity Codec Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrcodec.bytesize import format_bytes, parse_bytes
from attrcodec.errors import InvalidArgumentError
from attrcodec.units import KbSize, bytes_conf


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFormatBytes:

    @pytest.mark.parametrize(
        "n, kwargs, expected",
        [
            pytest.param(900, {}, "900 B", id="bytes"),
            pytest.param(1000, {}, "1 KB", id="decimal-kb"),
            pytest.param(12345, {}, "12 KiB", id="binary-kib"),
            pytest.param(9999999999, {"precision": 2}, "9.31 GiB", id="precision-2"),
            pytest.param(1536, {"precision": 2}, "1.50 KiB", id="keeps-nonzero-fraction"),
            pytest.param(1024 ** 2, {"precision": 2}, "1 MiB", id="strips-zero-fraction"),
            pytest.param(1024, {"policy": "iec"}, "1 KiB", id="iec"),
            pytest.param(1024, {"policy": "jedec"}, "1 KB", id="jedec"),
            pytest.param(2000, {"policy": "decimal"}, "2 KB", id="decimal"),
            pytest.param(1536.0, {"precision": 1}, "1.5 KiB", id="float-count"),
            pytest.param(0, {}, "0", id="zero"),
        ],
    )
    def test_auto_unit(self, n, kwargs, expected):
        assert format_bytes(n, **kwargs) == expected

    def test_auto_unit_truncates(self):
        """123456789 / 1024**2 == 117.74, shown without rounding up."""
        assert format_bytes(123456789) == "117 MiB"
        assert format_bytes(123456789, precision=1) == "117.7 MiB"
        assert format_bytes(1999, policy="decimal", precision=2) == "1.99 KB"

    @pytest.mark.parametrize(
        "unit, precision, expected",
        [
            pytest.param("KiB", 3, "120563.271 KiB", id="precision-3"),
            pytest.param("KiB", 1, "120563.3 KiB", id="precision-1-rounds"),
            pytest.param("KiB", 0, "120563 KiB", id="precision-0"),
            pytest.param("kib", 0, "120563 KiB", id="lowercase-unit"),
            pytest.param("XB", 0, "123456789 XB", id="unknown-unit"),
        ],
    )
    def test_explicit_unit(self, unit, precision, expected):
        assert format_bytes(123456789, unit, precision=precision) == expected

    def test_explicit_unit_precision_zero(self):
        assert format_bytes(1024, "KiB", precision=0) == "1 KiB"

    def test_conf_defaults(self):
        bytes_conf.policy = KbSize.DECIMAL
        bytes_conf.precision = 1
        assert format_bytes(1536) == "1.5 KB"

    @pytest.mark.parametrize("precision", [pytest.param(-1, id="negative"), pytest.param(19, id="too-large")])
    def test_precision_out_of_range(self, precision):
        with pytest.raises(InvalidArgumentError, match=r"precision must be in range \[0, 18\]"):
            format_bytes(1024, precision=precision)

    @pytest.mark.parametrize("n", [float("inf"), float("nan")], ids=["inf", "nan"])
    def test_non_finite_count(self, n):
        with pytest.raises(InvalidArgumentError, match="must be finite"):
            format_bytes(n)

    @pytest.mark.parametrize("n", [pytest.param("1024", id="str"), pytest.param(True, id="bool")])
    def test_bad_count_type(self, n):
        with pytest.raises(TypeError):
            format_bytes(n)


class TestParseBytes:

    @pytest.mark.parametrize(
        "value, kwargs, expected",
        [
            pytest.param("1.5 KiB", {}, 1536, id="kib"),
            pytest.param("1 gb", {"policy": "decimal"}, 1_000_000_000, id="gb-decimal"),
            pytest.param("1 gb", {}, 1_000_000_000, id="gb-combined"),
            pytest.param("1kb", {"policy": 1000}, 1000, id="kb-1000"),
            pytest.param("1kb", {"policy": 1024}, 1024, id="kb-1024"),
            pytest.param("1 KiB", {"policy": "decimal"}, 1024, id="falls-back-to-combined"),
            pytest.param("2048", {}, 2048, id="no-unit"),
            pytest.param("42 bytes", {}, 42, id="unrecognized-unit"),
            pytest.param("  3 MB ", {}, 3_000_000, id="padded"),
            pytest.param("-1 KiB", {}, -1024, id="negative"),
            pytest.param("1.999 KB", {}, 1990, id="two-digit-truncation"),
            pytest.param("1.999 KB", {"precision": 3}, 1999, id="precision-hint"),
            pytest.param((2, "kib"), {}, 2048, id="pair"),
            pytest.param(("1.5", "MB"), {}, 1_500_000, id="pair-str-number"),
            pytest.param(4096, {}, 4096, id="int-passthrough"),
            pytest.param(12.7, {}, 12, id="float"),
        ],
    )
    def test_parse(self, value, kwargs, expected):
        assert parse_bytes(value, **kwargs) == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("", id="empty"),
            pytest.param("KiB", id="unit-only"),
            pytest.param("abc", id="text"),
            pytest.param(("x", "KB"), id="pair-bad-number"),
            pytest.param(("inf", "KB"), id="pair-inf"),
            pytest.param(("nan", "KB"), id="pair-nan"),
            pytest.param("inf KB", id="inf-text"),
            pytest.param(float("nan"), id="float-nan"),
            pytest.param(float("-inf"), id="float-negative-inf"),
        ],
    )
    def test_unparseable_is_none(self, value):
        assert parse_bytes(value) is None

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(True, id="bool"),
            pytest.param({"n": 1}, id="dict"),
            pytest.param((1, "KB", "extra"), id="triple"),
        ],
    )
    def test_bad_type(self, value):
        with pytest.raises(TypeError):
            parse_bytes(value)

    @pytest.mark.parametrize(
        "text, policy",
        [
            pytest.param("1.5 KiB", None, id="kib"),
            pytest.param("3 MB", None, id="mb"),
            pytest.param("900 B", None, id="bytes"),
            pytest.param("7.25 GB", "decimal", id="decimal"),
            pytest.param("12 KB", "jedec", id="jedec"),
        ],
    )
    def test_format_of_parse_denotes_same_count(self, text, policy):
        n = parse_bytes(text, policy=policy)
        again = parse_bytes(format_bytes(n, precision=2, policy=policy), policy=policy)
        assert abs(again - n) <= n * 0.01
