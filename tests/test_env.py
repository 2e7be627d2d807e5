import json

import pytest
from eth_account import Account

from l2_withdraw.chain import ChainClient
from l2_withdraw.env import Environment
from l2_withdraw.exceptions import ConfigError

PRIVATE_KEY = "0x" + "01" * 32


def test_from_env():
    env = Environment.from_env({
        "L2W_PRIVATE_KEY": PRIVATE_KEY,
        "L2W_RPC_URL_10": "http://localhost:8545",
        "L2W_RPC_URL_1": "http://localhost:8546",
        "L2W_CONFIRMATIONS_1": "12",
        "UNRELATED": "x",
    })

    assert sorted(env.chains) == [1, 10]
    assert env.chain(1).confirmations == 12
    assert env.chain(10).confirmations == 1
    assert env.chain(10).rpc_url == "http://localhost:8545"


def test_from_env_falls_back_to_private_key():
    env = Environment.from_env({"PRIVATE_KEY": PRIVATE_KEY})

    assert env.chains == {}


def test_from_env_requires_key():
    with pytest.raises(ConfigError):
        Environment.from_env({"L2W_RPC_URL_10": "http://localhost:8545"})


def test_from_env_bad_confirmations():
    with pytest.raises(ConfigError):
        Environment.from_env({
            "L2W_PRIVATE_KEY": PRIVATE_KEY,
            "L2W_RPC_URL_10": "http://localhost:8545",
            "L2W_CONFIRMATIONS_10": "many",
        })


def test_from_credentials_file(tmp_path):
    path = tmp_path / "creds.json"
    path.write_text(json.dumps({
        "private_key": PRIVATE_KEY,
        "chains": {"10": {"rpc_url": "http://localhost:8545", "confirmations": 2}},
    }))

    env = Environment.from_credentials_file(str(path))

    assert env.chain(10).confirmations == 2


def test_credentials_file_missing(tmp_path):
    with pytest.raises(ConfigError):
        Environment.from_credentials_file(str(tmp_path / "missing.json"))


def test_credentials_file_bad_chain(tmp_path):
    path = tmp_path / "creds.json"
    path.write_text(json.dumps({"private_key": PRIVATE_KEY, "chains": {"10": {}}}))

    with pytest.raises(ConfigError):
        Environment.from_credentials_file(str(path))


def test_unknown_chain():
    env = Environment(private_key=PRIVATE_KEY)

    with pytest.raises(ConfigError):
        env.client(10)


def test_client_and_confirmer_resolve_for_chain():
    env = Environment.from_env({
        "L2W_PRIVATE_KEY": PRIVATE_KEY,
        "L2W_RPC_URL_10": "http://localhost:8545",
        "L2W_CONFIRMATIONS_10": "3",
    })

    client = env.client(10)
    confirmer = env.confirmer(10, timeout=60)

    assert isinstance(client, ChainClient)
    assert client.chain_id == 10
    assert client.address == Account.from_key(PRIVATE_KEY).address
    assert confirmer.chain_id == 10
    assert confirmer.confirmations == 3
    assert confirmer.timeout == 60
    assert confirmer.web3 is client.web3
