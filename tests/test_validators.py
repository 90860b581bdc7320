#
# Attrcodec - Validator Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrcodec.errors import InvalidArgumentError
from attrcodec.validators import MAX_PRECISION, validate_precision


# Tests ----------------------------------------------------------------------------------------------------------------

class TestValidatePrecision:

    @pytest.mark.parametrize("precision", [0, 2, MAX_PRECISION])
    def test_valid(self, precision):
        assert validate_precision(precision) == precision

    @pytest.mark.parametrize(
        "precision, error",
        [
            pytest.param(-1, InvalidArgumentError, id="negative"),
            pytest.param(MAX_PRECISION + 1, InvalidArgumentError, id="too-large"),
            pytest.param(2.0, TypeError, id="float"),
            pytest.param(True, TypeError, id="bool"),
            pytest.param("2", TypeError, id="str"),
        ],
    )
    def test_invalid(self, precision, error):
        with pytest.raises(error):
            validate_precision(precision)
