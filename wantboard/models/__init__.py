from wantboard.models.card_key import (
    FOIL_MARKER,
    KEY_DELIMITER,
    CardKey,
    CardKeyError,
    decode_card_key,
    encode_card_key,
    format_card_display,
)
from wantboard.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    CapacityError,
    CatalogNetworkError,
    CommandSyntaxError,
    FailureDetail,
    FailureKind,
    KnownError,
    NetworkReason,
    OperationValidationError,
    OutcomeType,
    ResolutionError,
    ResolutionReason,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from wantboard.models.operation import Operation, Sign
from wantboard.models.wants import SpaceState, UserWantList, WantListStore

__all__ = [
    "FOIL_MARKER",
    "KEY_DELIMITER",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "ApiResponse",
    "CapacityError",
    "CardKey",
    "CardKeyError",
    "CatalogNetworkError",
    "CommandSyntaxError",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "NetworkReason",
    "Operation",
    "OperationValidationError",
    "OutcomeType",
    "ResolutionError",
    "ResolutionReason",
    "Sign",
    "SpaceState",
    "UserWantList",
    "WantListStore",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "decode_card_key",
    "encode_card_key",
    "finalize_response",
    "format_card_display",
    "is_finalized",
]
