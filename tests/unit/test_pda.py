import pytest
from solders.pubkey import Pubkey

from pumpswap.core.constants import (
    ASSOCIATED_TOKEN_ACCOUNT_PROGRAM,
    POOL_SEED,
    PUMP_AMM_PROGRAM_ID,
    PUMP_PROGRAM_ID,
    SOL_WRAPPED_MINT,
    TOKEN_PROGRAM_2022_ID,
    TOKEN_PROGRAM_ID,
)
from pumpswap.core.errors import InvalidInputError
from pumpswap.core.utils import (
    derive_address,
    get_associated_token_address,
    get_coin_creator_vault_authority_pda,
    get_event_authority_pda,
    get_global_config_pda,
    get_lp_mint_pda,
    get_pool_authority_pda,
    get_pool_pda,
    get_user_volume_accumulator_pda,
    u16_to_le_bytes,
)

CREATOR = Pubkey.from_string("Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1")
BASE_MINT = Pubkey.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")


class TestKnownAddresses:
    def test_global_config(self) -> None:
        assert get_global_config_pda() == Pubkey.from_string(
            "ADyA8hdefvWN2dbGGWFotbzWxrAvLW83WG6QCVXvJKqw"
        )

    def test_amm_event_authority(self) -> None:
        assert get_event_authority_pda() == Pubkey.from_string(
            "GS4CU59F31iL7aR2Q8zVS8DRrcRnXX1yjQ66TqNVQnaR"
        )

    def test_bonding_curve_event_authority(self) -> None:
        assert get_event_authority_pda(PUMP_PROGRAM_ID) == Pubkey.from_string(
            "Ce6TQqeHC9p8KetsN6JsjHK7UTZk7nasjjnr7XxXp9F1"
        )


class TestDeriveAddress:
    def test_deterministic(self) -> None:
        seeds = [b"global_config"]
        first = derive_address(seeds, PUMP_AMM_PROGRAM_ID)
        second = derive_address(seeds, PUMP_AMM_PROGRAM_ID)

        assert first == second
        assert 0 <= first.bump <= 255
        assert first.seeds == (b"global_config",)
        assert first.program_id == PUMP_AMM_PROGRAM_ID

    def test_matches_find_program_address(self) -> None:
        derived = derive_address([b"pool_lp_mint", bytes(CREATOR)], PUMP_AMM_PROGRAM_ID)
        address, bump = Pubkey.find_program_address(
            [b"pool_lp_mint", bytes(CREATOR)], PUMP_AMM_PROGRAM_ID
        )
        assert derived.address == address
        assert derived.bump == bump

    def test_single_byte_change(self) -> None:
        a = derive_address([b"pool", b"\x00\x00"], PUMP_AMM_PROGRAM_ID)
        b = derive_address([b"pool", b"\x01\x00"], PUMP_AMM_PROGRAM_ID)
        assert a.address != b.address

    def test_program_id_changes_result(self) -> None:
        a = derive_address([b"__event_authority"], PUMP_AMM_PROGRAM_ID)
        b = derive_address([b"__event_authority"], PUMP_PROGRAM_ID)
        assert a.address != b.address


class TestPoolAddresses:
    def test_u16_little_endian(self) -> None:
        assert u16_to_le_bytes(0) == b"\x00\x00"
        assert u16_to_le_bytes(1) == b"\x01\x00"
        assert u16_to_le_bytes(0x0102) == b"\x02\x01"

    def test_u16_out_of_range(self) -> None:
        with pytest.raises(InvalidInputError):
            u16_to_le_bytes(65_536)
        with pytest.raises(InvalidInputError):
            u16_to_le_bytes(-1)

    def test_pool_seeds(self) -> None:
        expected, _ = Pubkey.find_program_address(
            [POOL_SEED, b"\x07\x00", bytes(CREATOR), bytes(BASE_MINT), bytes(SOL_WRAPPED_MINT)],
            PUMP_AMM_PROGRAM_ID,
        )
        assert get_pool_pda(7, CREATOR, BASE_MINT, SOL_WRAPPED_MINT) == expected

    def test_pool_depends_on_index(self) -> None:
        assert get_pool_pda(0, CREATOR, BASE_MINT, SOL_WRAPPED_MINT) != get_pool_pda(
            1, CREATOR, BASE_MINT, SOL_WRAPPED_MINT
        )

    def test_lp_mint(self) -> None:
        pool = get_pool_pda(0, CREATOR, BASE_MINT, SOL_WRAPPED_MINT)
        expected, _ = Pubkey.find_program_address([b"pool_lp_mint", bytes(pool)], PUMP_AMM_PROGRAM_ID)
        assert get_lp_mint_pda(pool) == expected

    def test_pool_authority_on_bonding_curve_program(self) -> None:
        expected, _ = Pubkey.find_program_address([b"pool-authority", bytes(BASE_MINT)], PUMP_PROGRAM_ID)
        assert get_pool_authority_pda(BASE_MINT) == expected

    def test_coin_creator_vault_authority(self) -> None:
        expected, _ = Pubkey.find_program_address([b"creator_vault", bytes(CREATOR)], PUMP_AMM_PROGRAM_ID)
        assert get_coin_creator_vault_authority_pda(CREATOR) == expected

    def test_user_volume_accumulator(self) -> None:
        expected, _ = Pubkey.find_program_address(
            [b"user_volume_accumulator", bytes(CREATOR)], PUMP_AMM_PROGRAM_ID
        )
        assert get_user_volume_accumulator_pda(CREATOR) == expected


class TestAssociatedTokenAddress:
    def test_classic_token_program(self) -> None:
        expected, _ = Pubkey.find_program_address(
            [bytes(CREATOR), bytes(TOKEN_PROGRAM_ID), bytes(SOL_WRAPPED_MINT)],
            ASSOCIATED_TOKEN_ACCOUNT_PROGRAM,
        )
        assert get_associated_token_address(CREATOR, SOL_WRAPPED_MINT) == expected

    def test_token_2022_differs(self) -> None:
        classic = get_associated_token_address(CREATOR, BASE_MINT)
        token_2022 = get_associated_token_address(CREATOR, BASE_MINT, TOKEN_PROGRAM_2022_ID)
        assert classic != token_2022
