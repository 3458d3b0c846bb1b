"""
Order status vocabulary.

The stored values are the hyphenated English codes below. Two older client
vocabularies are still accepted on input and translated here: the mobile
client's upper-case enum codes and the web client's free-text labels (in
English and in their original Turkish spelling).
"""

from enum import Enum
from typing import Optional, Type, TypeVar

class OrderStatus(str, Enum):
    IN_PREPARATION = "in-preparation"
    DELIVERED = "delivered"

class PaymentStatus(str, Enum):
    PREPAID = "prepaid"
    NOT_COLLECTED = "not-collected"
    COLLECT_ON_DELIVERY = "collect-on-delivery"
    CREDIT = "credit"

class InvoiceStatus(str, Enum):
    ISSUED = "issued"
    CUSTOMER_DECLINED = "customer-declined"
    NOT_REQUIRED = "not-required"

DEFAULT_ORDER_STATUS = OrderStatus.IN_PREPARATION
DEFAULT_PAYMENT_STATUS = PaymentStatus.NOT_COLLECTED
DEFAULT_INVOICE_STATUS = InvoiceStatus.NOT_REQUIRED

# Labels shown to staff
LABELS = {
    OrderStatus.IN_PREPARATION: "Hazırlanıyor",
    OrderStatus.DELIVERED: "Teslim Edildi",
    PaymentStatus.PREPAID: "Önden Ödeme Alındı",
    PaymentStatus.NOT_COLLECTED: "Tahsil Edilmedi",
    PaymentStatus.COLLECT_ON_DELIVERY: "Teslim Anında",
    PaymentStatus.CREDIT: "Veresiye",
    InvoiceStatus.ISSUED: "Kesildi",
    InvoiceStatus.CUSTOMER_DECLINED: "İstemiyor",
    InvoiceStatus.NOT_REQUIRED: "Gerek Yok",
}

# Mobile client enum codes
_MOBILE_CODES = {
    "hazirlaniyor": OrderStatus.IN_PREPARATION,
    "teslim-edildi": OrderStatus.DELIVERED,
    "onden-odeme-alindi": PaymentStatus.PREPAID,
    "tahsil-edilmedi": PaymentStatus.NOT_COLLECTED,
    "teslim-aninda": PaymentStatus.COLLECT_ON_DELIVERY,
    "veresiye": PaymentStatus.CREDIT,
    "kesildi": InvoiceStatus.ISSUED,
    "istemiyor": InvoiceStatus.CUSTOMER_DECLINED,
    "gerek-yok": InvoiceStatus.NOT_REQUIRED,
}

# Web client free-text vocabulary. "prepared" and "not-delivered" both mean the
# order has not reached the customer yet; "collected" has no finer breakdown so
# it maps to prepaid; "to-be-issued" has no stored equivalent and is kept as
# not-required until staff issue the invoice.
_WEB_VALUES = {
    "prepared": OrderStatus.IN_PREPARATION,
    "hazirlandi": OrderStatus.IN_PREPARATION,
    "not-delivered": OrderStatus.IN_PREPARATION,
    "teslim-edilmedi": OrderStatus.IN_PREPARATION,
    "collected": PaymentStatus.PREPAID,
    "tahsil-edildi": PaymentStatus.PREPAID,
    "fatura-kesildi": InvoiceStatus.ISSUED,
    "to-be-issued": InvoiceStatus.NOT_REQUIRED,
    "fatura-kesilecek": InvoiceStatus.NOT_REQUIRED,
    "fatura-istemiyor": InvoiceStatus.CUSTOMER_DECLINED,
}

_TURKISH_FOLD = str.maketrans("çğıöşüÇĞİÖŞÜ", "cgiosucgiosu")

E = TypeVar("E", OrderStatus, PaymentStatus, InvoiceStatus)

def _key(raw: str) -> str:
    folded = raw.strip().replace("İ", "i").translate(_TURKISH_FOLD).lower()
    return "-".join(folded.replace("_", " ").replace("-", " ").split())

def normalize(enum_cls: Type[E], value) -> Optional[E]:
    """Translate ``value`` from any known vocabulary into ``enum_cls``.

    ``None`` passes through. Raises ``ValueError`` for values that do not
    belong to ``enum_cls`` in any vocabulary.
    """
    if value is None or isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{enum_cls.__name__} must be a string")

    key = _key(value)
    try:
        return enum_cls(key)
    except ValueError:
        pass

    for table in (_MOBILE_CODES, _WEB_VALUES):
        mapped = table.get(key)
        if isinstance(mapped, enum_cls):
            return mapped

    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"'{value}' is not a valid {enum_cls.__name__}; expected one of: {allowed}")

def vocabulary() -> dict:
    """Allowed values with display labels, grouped by field."""
    def describe(enum_cls, default):
        return {
            "default": default.value,
            "values": [{"value": m.value, "label": LABELS[m]} for m in enum_cls],
        }

    return {
        "status": describe(OrderStatus, DEFAULT_ORDER_STATUS),
        "paymentStatus": describe(PaymentStatus, DEFAULT_PAYMENT_STATUS),
        "invoiceStatus": describe(InvoiceStatus, DEFAULT_INVOICE_STATUS),
    }
