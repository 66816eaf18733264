"""Tests for configuration loading and address validation."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from squiggle.address import ZERO_ADDRESS, to_checksum_address, validate_address
from squiggle.chain.tx import Wallet
from squiggle.config import GatewayConfig
from squiggle.errors import InvalidInputError, NotConfiguredError
from squiggle.gateway import SquiggleGateway
from squiggle.keys import get_account, get_address

from .conftest import CONTRACT_ADDRESS, TEST_PRIVATE_KEY

EIP55_VECTORS = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]

_ENV_KEYS = (
    "SQUIGGLE_CONTRACT_ADDRESS",
    "SQUIGGLE_RPC_URL",
    "CHAIN_ID",
    "SQUIGGLE_EXPLORER_URL",
    "SQUIGGLE_RECEIPT_TIMEOUT",
    "PRIVATE_KEY",
)


@pytest.fixture()
def clean_env():
    env = {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestAddress:
    @pytest.mark.parametrize("address", EIP55_VECTORS)
    def test_checksum_vectors(self, address: str) -> None:
        assert to_checksum_address(address.lower()) == address
        assert validate_address(address) == address

    def test_lowercase_accepted(self) -> None:
        assert validate_address(EIP55_VECTORS[0].lower()) == EIP55_VECTORS[0]

    def test_bad_checksum_rejected(self) -> None:
        broken = EIP55_VECTORS[0].replace("aA", "Aa", 1)
        with pytest.raises(InvalidInputError):
            validate_address(broken)

    @pytest.mark.parametrize("address", ["", "0x", "0x1234", "5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed", "0x" + "g" * 40])
    def test_malformed(self, address: str) -> None:
        with pytest.raises(InvalidInputError):
            validate_address(address)


class TestGatewayConfig:
    def test_defaults_are_unconfigured(self, clean_env, tmp_path: Path) -> None:
        config = GatewayConfig.from_env(tmp_path / "missing.env")
        assert config.contract_address == ZERO_ADDRESS
        assert config.chain_id == 421614
        assert not config.is_configured
        with pytest.raises(NotConfiguredError):
            config.require_configured()

    def test_reads_env_file(self, clean_env, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            f"SQUIGGLE_CONTRACT_ADDRESS={CONTRACT_ADDRESS}\n"
            "SQUIGGLE_RPC_URL=http://localhost:8545\n"
            "CHAIN_ID=31337\n",
            encoding="utf-8",
        )
        config = GatewayConfig.from_env(env_file)
        assert config.contract_address == CONTRACT_ADDRESS
        assert config.rpc_url == "http://localhost:8545"
        assert config.chain_id == 31337
        assert config.require_configured() is config

    def test_exported_values_win(self, clean_env, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("CHAIN_ID=31337\n", encoding="utf-8")
        os.environ["CHAIN_ID"] = "1"
        assert GatewayConfig.from_env(env_file).chain_id == 1

    def test_bad_chain_id(self, clean_env, tmp_path: Path) -> None:
        os.environ["CHAIN_ID"] = "arbitrum"
        with pytest.raises(InvalidInputError):
            GatewayConfig.from_env(tmp_path / "missing.env")

    def test_malformed_contract_address(self) -> None:
        with pytest.raises(InvalidInputError):
            GatewayConfig(contract_address="0x1234").require_configured()

    def test_overrides_skip_none(self) -> None:
        config = GatewayConfig().with_overrides(contract_address=CONTRACT_ADDRESS, rpc_url=None)
        assert config.contract_address == CONTRACT_ADDRESS
        assert config.rpc_url == GatewayConfig().rpc_url

    def test_explorer_links(self) -> None:
        config = GatewayConfig(explorer_url="https://sepolia.arbiscan.io/")
        assert config.explorer_tx_url("0xabc") == "https://sepolia.arbiscan.io/tx/0xabc"
        assert config.explorer_address_url(CONTRACT_ADDRESS).endswith(f"/address/{CONTRACT_ADDRESS}")


class TestFromConfig:
    def test_wallet_only_with_key(self) -> None:
        gateway = SquiggleGateway.from_config(GatewayConfig(contract_address=CONTRACT_ADDRESS))
        assert gateway.wallet is None
        assert gateway.contract.address == CONTRACT_ADDRESS

    def test_wallet_wired(self) -> None:
        gateway = SquiggleGateway.from_config(
            GatewayConfig(contract_address=CONTRACT_ADDRESS, chain_id=31337, private_key=TEST_PRIVATE_KEY)
        )
        assert isinstance(gateway.wallet, Wallet)
        assert gateway.wallet.chain_id == 31337
        assert gateway.wallet.rpc is gateway.rpc


class TestKeys:
    def test_unprefixed_key(self) -> None:
        assert get_address(TEST_PRIVATE_KEY[2:]) == get_address(TEST_PRIVATE_KEY)

    def test_account_signs_for_address(self) -> None:
        account = get_account(TEST_PRIVATE_KEY)
        assert account.address == get_address(TEST_PRIVATE_KEY)
        assert account.address == to_checksum_address(account.address)
