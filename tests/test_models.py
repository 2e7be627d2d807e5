import pytest

from l2_withdraw.explorer import explorer_link
from l2_withdraw.models import BridgeAdapterRef, TokenRef, ZERO_ADDRESS, to_address

from conftest import ADAPTER, CHAIN_ID, TOKEN, make_request

WETH = "0x4200000000000000000000000000000000000006"


def test_request_defaults():
    request = make_request(amount=0)

    assert request.remote_token == ZERO_ADDRESS
    assert request.extension_data == b""
    assert request.amount == 0


def test_addresses_are_checksummed():
    token = TokenRef(CHAIN_ID, "0xdac17f958d2ee523a2206206994597c13d831ec7")

    assert token.address == "0xdAC17F958D2ee523a2206206994597C13D831ec7"


@pytest.mark.parametrize("value", ["", "0x1234", "not an address", None])
def test_invalid_address(value):
    with pytest.raises(ValueError):
        to_address(value)


def test_negative_amount_rejected():
    with pytest.raises(ValueError):
        make_request(amount=-1)


@pytest.mark.parametrize("amount", [1.5, "100", True])
def test_amount_must_be_int(amount):
    with pytest.raises(TypeError):
        make_request(amount=amount)


def test_token_on_other_chain_rejected():
    with pytest.raises(ValueError):
        make_request(token=TokenRef(CHAIN_ID + 1, TOKEN))


def test_adapter_on_other_chain_rejected():
    with pytest.raises(ValueError):
        make_request(adapter=BridgeAdapterRef(1, ADAPTER))


def test_request_is_immutable():
    request = make_request()

    with pytest.raises(AttributeError):
        request.amount = 1


def test_explorer_link_known_chain():
    assert explorer_link(10, "0xabc") == "https://optimistic.etherscan.io/tx/0xabc"


def test_explorer_link_unknown_chain():
    assert explorer_link(999999, "0xabc") == "0xabc"
