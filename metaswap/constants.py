"""Protocol constants for the stable swap engine.

Fee values are expressed against FEE_DENOMINATOR (10^10 == 100%).
Amplification values are stored multiplied by A_PRECISION.
"""

# All balances are normalized to this many decimals before entering the solvers
POOL_PRECISION_DECIMALS = 18

# Fee scale: 10^10 == 100%
FEE_DENOMINATOR = 10**10

# 1% swap fee cap
MAX_SWAP_FEE = 10**8

# Admin can take up to 100% of swap fees
MAX_ADMIN_FEE = 10**10

# 0.5% withdraw fee cap
MAX_WITHDRAW_FEE = 5 * 10**8

# Early-exit fee decays linearly to zero over this window (seconds)
WITHDRAW_FEE_DECAY_TIME = 4 * 7 * 24 * 60 * 60

# Newton iteration bound for the D and Y solvers
MAX_LOOP_LIMIT = 256

# Amplification parameters
A_PRECISION = 100
MAX_A = 10**6
MAX_A_CHANGE = 2
MIN_RAMP_TIME = 14 * 24 * 60 * 60
RAMP_COOLDOWN = 24 * 60 * 60

# Base pool share price cache
BASE_CACHE_EXPIRE_TIME = 10 * 60
BASE_VIRTUAL_PRICE_PRECISION = 10**18

# Pool size bounds
MIN_POOLED_TOKENS = 2
MAX_POOLED_TOKENS = 32

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
