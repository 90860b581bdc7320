#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrcodec.definitions import definitions_conf
from attrcodec.registry import reset_default_registry
from attrcodec.units import bytes_conf


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_defaults():
    """Reset the default registry and module-wide defaults around every test."""
    enum_start = definitions_conf.enum_start
    policy, precision = bytes_conf.policy, bytes_conf.precision
    reset_default_registry()
    yield
    reset_default_registry()
    definitions_conf.enum_start = enum_start
    bytes_conf.policy, bytes_conf.precision = policy, precision


@pytest.fixture
def tsv_records() -> list[str]:
    """Tab separated definition records, including lines that must be skipped."""
    return [
        "# comment line\n",
        "status\t1\tpublic\tforsale\tFor Sale\tListed and available\n",
        "status\t2\tpublic\tcontract\tUnder Contract\tOffer accepted\n",
        "status\t3\tpublic\tsold\tSold\tTransaction closed\n",
        "status\t4\tpublic\twithdrawn\t\tMissing short name\n",
        "status\t5\tpublic\t\tBlank\tMissing symbol\n",
        "status\t6\tpublic\tincomplete\n",
        "\n",
        "role\ta\tadmin\tadmin\tAdmin\tFull access\n",
        "role\t\tuser\tguest\tGuest\tRead only\n",
    ]
