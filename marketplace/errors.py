"""Error catalog and the application exception that carries it."""

from enum import Enum
from http import HTTPStatus


class ErrorCode(Enum):
    """Closed set of failure conditions, each a fixed (code, message, status) triple.

    Codes are grouped by leading digits: 1000s system, 1100s auth, 1200s user,
    1300s shop, 1400s category, 1500s product, 1600s cart, 1700s order,
    1800s address, 1900s generic, 2000s payment.
    """

    # System / uncategorized
    UNCATEGORIZED_EXCEPTION = (9999, "Uncategorized Exception", HTTPStatus.INTERNAL_SERVER_ERROR)
    VALIDATION_ERROR = (1000, "Validation failed", HTTPStatus.BAD_REQUEST)
    METHOD_NOT_ALLOWED = (1001, "Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
    JSON_PARSE_ERROR = (1002, "Invalid JSON format", HTTPStatus.BAD_REQUEST)
    ENDPOINT_NOT_FOUND = (1003, "Endpoint not found", HTTPStatus.NOT_FOUND)

    # Authentication & Authorization
    UNAUTHENTICATED = (1100, "Unauthenticated", HTTPStatus.UNAUTHORIZED)
    UNAUTHORIZED = (1101, "You do not have permission", HTTPStatus.FORBIDDEN)
    INVALID_TOKEN = (1102, "Invalid token", HTTPStatus.BAD_REQUEST)
    TOKEN_EXPIRED = (1103, "Token has expired", HTTPStatus.BAD_REQUEST)

    # User
    USERNAME_EXISTED = (1200, "User already exists", HTTPStatus.BAD_REQUEST)
    USERNAME_INVALID = (1201, "Username must be at least 3 characters", HTTPStatus.BAD_REQUEST)
    PASSWORD_INVALID = (1202, "Password must be at least 8 characters", HTTPStatus.BAD_REQUEST)
    USER_NOT_EXIST = (1203, "User does not exist", HTTPStatus.NOT_FOUND)
    INVALID_EMAIL = (1204, "Your email must be HUST email", HTTPStatus.BAD_REQUEST)
    EMAIL_EXISTED = (1205, "Email already existed", HTTPStatus.BAD_REQUEST)
    EMAIL_SEND_FAILED = (1206, "Email send failed", HTTPStatus.BAD_REQUEST)

    # Shop
    SHOP_NOT_EXIST = (1300, "Shop does not exist", HTTPStatus.NOT_FOUND)

    # Category
    CATEGORY_EXISTED = (1400, "Category already exists", HTTPStatus.BAD_REQUEST)
    CATEGORY_NOT_EXIST = (1401, "Category does not exist", HTTPStatus.BAD_REQUEST)
    CATEGORY_USED_BY_PRODUCT = (1402, "Category is used by product", HTTPStatus.BAD_REQUEST)

    # Product
    PRODUCT_NOT_EXIST = (1500, "Product does not exist", HTTPStatus.BAD_REQUEST)

    # Cart
    CART_EMPTY = (1600, "Cart is empty", HTTPStatus.BAD_REQUEST)
    CART_ITEM_NOT_EXIST = (1601, "Cart item does not exist", HTTPStatus.BAD_REQUEST)

    # Order
    ORDER_NOT_EXIST = (1700, "Order does not exist", HTTPStatus.BAD_REQUEST)

    # Address / Ward
    WARD_NOT_FOUND = (1800, "Ward not found", HTTPStatus.BAD_REQUEST)
    ADDRESS_NOT_FOUND = (1801, "Address does not exist", HTTPStatus.BAD_REQUEST)

    # Generic invalid value
    INVALID_VALUE = (1900, "Invalid value", HTTPStatus.BAD_REQUEST)

    # Payment
    PAYMENT_FAILED = (2000, "Payment failed", HTTPStatus.BAD_REQUEST)

    def __init__(self, code: int, message: str, status: HTTPStatus) -> None:
        self.code = code
        self.message = message
        self.status = status


class AppError(Exception):
    """Raised by domain logic to signal a catalogued failure.

    ``message`` overrides the catalog default when it is not None.
    """

    def __init__(self, error_code: ErrorCode, message: str | None = None) -> None:
        self.error_code = error_code
        self.message = message if message is not None else error_code.message
        super().__init__(self.message)
