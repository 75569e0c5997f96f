"""On-chain constants of the coin_locker Move module."""

MODULE_NAME = "coin_locker"

MIN_LOCK_DURATION = 86_400  # 1 day in seconds
MAX_LOCK_DURATION = 31_536_000  # 365 days in seconds

SUI_CLOCK_ID = "0x6"
SUI_COIN_TYPE = "0x2::sui::SUI"

LOCK_CERTIFICATE_STRUCT = "LockCertificate"
COIN_LOCK_STRUCT = "CoinLock"

# Move abort codes raised by coin_locker.
E_STILL_LOCKED = 0
E_NOT_OWNER = 1
E_INVALID_AMOUNT = 2
E_INVALID_DURATION = 3
E_CONTRACT_PAUSED = 4
E_ALREADY_CLAIMED = 5

ABORT_MESSAGES: dict[int, str] = {
    E_STILL_LOCKED: "Coins are still locked",
    E_NOT_OWNER: "Not the owner of this lock",
    E_INVALID_AMOUNT: "Invalid lock amount",
    E_INVALID_DURATION: "Invalid lock duration",
    E_CONTRACT_PAUSED: "Contract is paused",
    E_ALREADY_CLAIMED: "Coins already claimed",
}
