#
# Attrcodec - Byte Units Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrcodec.units import (
    COMBINED, DECIMAL, IEC_BINARY, JEDEC_BINARY, KbSize, canonical_unit, resolve_policy, select_table,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestUnitTables:

    def test_decimal_multipliers(self):
        assert DECIMAL["B"] == 1
        assert DECIMAL["KB"] == 1000
        assert DECIMAL["YB"] == 1000 ** 8
        assert len(DECIMAL) == 9

    def test_binary_multipliers(self):
        assert IEC_BINARY["KiB"] == 1024
        assert IEC_BINARY["YiB"] == 1024 ** 8
        assert JEDEC_BINARY["KB"] == 1024
        assert JEDEC_BINARY["GB"] == 1024 ** 3
        assert set(JEDEC_BINARY) == set(DECIMAL)

    def test_combined_is_union(self):
        assert COMBINED["KB"] == 1000
        assert COMBINED["KiB"] == 1024
        assert len(COMBINED) == 17

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DECIMAL["KB"] = 1024  # type: ignore[index]


class TestSelectTable:

    @pytest.mark.parametrize(
        "policy, expected",
        [
            pytest.param("decimal", KbSize.DECIMAL, id="decimal"),
            pytest.param(1000, KbSize.DECIMAL, id="int-1000"),
            pytest.param("jedec", KbSize.JEDEC, id="jedec"),
            pytest.param("old", KbSize.JEDEC, id="old"),
            pytest.param(1024, KbSize.JEDEC, id="int-1024"),
            pytest.param("iec", KbSize.IEC, id="iec"),
            pytest.param("NEW", KbSize.IEC, id="new-upper"),
            pytest.param("both", KbSize.BOTH, id="both"),
            pytest.param("combined", KbSize.BOTH, id="combined"),
            pytest.param(KbSize.IEC, KbSize.IEC, id="member"),
            pytest.param(None, KbSize.BOTH, id="none"),
            pytest.param("bogus", KbSize.BOTH, id="unknown-str"),
            pytest.param(512, KbSize.BOTH, id="unknown-int"),
            pytest.param(True, KbSize.BOTH, id="bool"),
        ],
    )
    def test_resolve_policy(self, policy, expected):
        assert resolve_policy(policy) is expected

    @pytest.mark.parametrize(
        "policy, table",
        [
            pytest.param("decimal", DECIMAL, id="decimal"),
            pytest.param("jedec", JEDEC_BINARY, id="jedec"),
            pytest.param("iec", IEC_BINARY, id="iec"),
            pytest.param(None, COMBINED, id="default"),
        ],
    )
    def test_select_table(self, policy, table):
        assert select_table(policy) is table


class TestCanonicalUnit:

    @pytest.mark.parametrize(
        "spelling, expected",
        [
            pytest.param("b", "B", id="byte"),
            pytest.param("kb", "KB", id="kb"),
            pytest.param("Kb", "KB", id="mixed"),
            pytest.param("kib", "KiB", id="kib"),
            pytest.param("KIB", "KiB", id="kib-upper"),
            pytest.param(" gb ", "GB", id="padded"),
        ],
    )
    def test_canonical_unit(self, spelling, expected):
        assert canonical_unit(spelling) == expected
