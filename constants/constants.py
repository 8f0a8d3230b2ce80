# Deployed governance program (devnet)
GOVERNANCE_PROGRAM_ID = "C3hALGCa5NAEUYDBt3yM7vNPU44TZ3LCBkciXScri6Ba"

DEVNET_RPC_URL = "https://api.devnet.solana.com"

# Instruction variant tags, first byte of every instruction payload
CREATE_PROPOSAL_TAG = 0
VOTE_TAG = 1
EXECUTE_PROPOSAL_TAG = 2

# Integer widths
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

PUBKEY_LENGTH = 32
STRING_LENGTH_PREFIX_SIZE = 4

# Bytes allocated for a new proposal account. Large texts may not fit.
PROPOSAL_ACCOUNT_SPACE = 1000

# Fallback scan over padded account data
FALLBACK_SCAN_STEP = 10
MIN_ACCOUNT_DATA_SIZE = PUBKEY_LENGTH

DEFAULT_VOTING_PERIOD_SECONDS = 86400
DEFAULT_VOTE_WEIGHT = 1

PROPOSAL_TITLE_PREFIX = "Proposal: "
PROPOSAL_TITLE_MAX_CHARS = 50

DEFAULT_ANALYSIS_SUMMARY = "No summary available."
DEFAULT_ANALYSIS_SENTIMENT = "Neutral"
