from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants.constants import (
    DEFAULT_VOTING_PERIOD_SECONDS,
    DEVNET_RPC_URL,
    FALLBACK_SCAN_STEP,
    GOVERNANCE_PROGRAM_ID,
    PROPOSAL_ACCOUNT_SPACE,
)

# Every settings group reads the same flat env vars / .env file
ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = ENV_CONFIG

    name: str = Field("Solana Governance Client", validation_alias="APP_NAME")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    @property
    def effective_log_level(self) -> str:
        """DEBUG overrides LOG_LEVEL."""
        return "DEBUG" if self.debug else self.log_level


class SolanaSettings(BaseSettings):
    """Settings related to the Solana RPC node and the governance program."""

    model_config = ENV_CONFIG

    rpc_url: str = Field(
        default=DEVNET_RPC_URL,
        validation_alias="SOLANA_RPC_URL",
        description="Solana JSON-RPC URL",
    )
    program_id: str = Field(
        default=GOVERNANCE_PROGRAM_ID,
        validation_alias="PROGRAM_ID",
        description="Address of the deployed governance program",
    )
    commitment: str = Field(default="confirmed", validation_alias="SOLANA_COMMITMENT")
    # Timeout for a single RPC call (seconds)
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")
    confirm_timeout_seconds: float = Field(default=30.0, gt=0, validation_alias="CONFIRM_TIMEOUT_SECONDS")
    confirm_poll_interval_seconds: float = Field(default=0.5, gt=0, validation_alias="CONFIRM_POLL_INTERVAL_SECONDS")


class GovernanceSettings(BaseSettings):
    """Proposal account layout and client defaults."""

    model_config = ENV_CONFIG

    proposal_account_space: int = Field(
        default=PROPOSAL_ACCOUNT_SPACE, gt=0, validation_alias="PROPOSAL_ACCOUNT_SPACE"
    )
    default_voting_period: int = Field(
        default=DEFAULT_VOTING_PERIOD_SECONDS, ge=0, validation_alias="DEFAULT_VOTING_PERIOD"
    )
    fallback_scan_step: int = Field(default=FALLBACK_SCAN_STEP, gt=0, validation_alias="FALLBACK_SCAN_STEP")
    wallet_keypair_path: str = Field(
        default="~/.config/solana/id.json",
        validation_alias="WALLET_KEYPAIR_PATH",
        description="Keypair file used to sign transactions from the CLI",
    )


class AnalysisSettings(BaseSettings):
    """Settings for the external proposal analysis endpoint."""

    model_config = ENV_CONFIG

    api_url: str = Field(default="http://localhost:3000/api/analyze", validation_alias="ANALYSIS_API_URL")
    timeout: int = Field(default=60, gt=0, validation_alias="ANALYSIS_TIMEOUT")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Sub-settings read flat env vars through their validation aliases.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    solana: SolanaSettings = Field(default_factory=SolanaSettings)
    governance: GovernanceSettings = Field(default_factory=GovernanceSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)

    model_config = ENV_CONFIG


# Singleton instance
settings = Settings()
