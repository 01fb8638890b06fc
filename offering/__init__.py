# Meme Offering Engine - Source Package
from decimal import Decimal

# Shared constants
CTC_DECIMALS = 18
CTC_DIVISOR = 10**CTC_DECIMALS
CTC_DIVISOR_DEC = Decimal(10) ** CTC_DECIMALS  # For parsing CTC amounts
UINT256_MAX = 2**256 - 1

# Ledger assets
NATIVE_ASSET = "CTC"
DEPOSIT_ASSET = "DNT"

# Parameter store keys
MAX_START_PRICE = "maxStartPrice"
MAX_TOTAL_SUPPLY = "maxTotalSupply"
OFFERING_DURATION = "offeringDuration"

DEFAULT_PARAMETERS = {
    MAX_START_PRICE: 10 * CTC_DIVISOR,
    MAX_TOTAL_SUPPLY: 1_000_000,
    OFFERING_DURATION: 7 * 24 * 60 * 60,  # one week
}
