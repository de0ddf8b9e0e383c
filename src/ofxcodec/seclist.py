"""Security list requests and responses (SECLISTMSGSRQV1 / SECLISTMSGSRSV1).

The SECLISTTRNRS transaction only acknowledges the request; the securities
themselves arrive in a SECLIST element alongside it in the same message set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from ofxcodec.aggregate import Aggregate, Encoder, Message, Variant, child_elements, decode_variant, element, write_variant
from ofxcodec.common import Currency, Status
from ofxcodec.constants import (
    AssetClass,
    CallType,
    CouponFreq,
    DebtClass,
    DebtType,
    MessageType,
    MfType,
    OptType,
    StockType,
)
from ofxcodec.types import UID, Amount, Date, Int, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime
    from fractions import Fraction
    from typing import Self

    from ofxcodec.constants import OfxVersion
    from ofxcodec.tokens import StartElement, TokenReader


@dataclass(slots=True)
class SecurityID(Aggregate):
    """Identifies a security by a unique id and the kind of id, usually CUSIP."""

    unique_id: str | None = element('UNIQUEID', String)
    unique_id_type: str | None = element('UNIQUEIDTYPE', String)


@dataclass(slots=True)
class SecurityRequest(Aggregate):
    """One security to describe, normally by exactly one of the three identifiers."""

    sec_id: SecurityID | None = element('SECID', SecurityID, optional=True)
    ticker: str | None = element('TICKER', String, optional=True)
    fiid: str | None = element('FIID', String, optional=True)


@dataclass(slots=True)
class SecListRequest(Message):
    ELEMENT = 'SECLISTTRNRQ'
    MESSAGE_TYPE = MessageType.SEC_LIST_RQ

    trnuid: UID | None = element('TRNUID', UID)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    tan: str | None = element('TAN', String, optional=True)
    securities: list[SecurityRequest] = element('SECLISTRQ>SECRQ', SecurityRequest, many=True)


@dataclass(slots=True)
class SecListResponse(Message):
    ELEMENT = 'SECLISTTRNRS'
    MESSAGE_TYPE = MessageType.SEC_LIST_RS

    trnuid: UID | None = element('TRNUID', UID)
    status: Status | None = element('STATUS', Status)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)


@dataclass(slots=True)
class SecInfo(Aggregate):
    """Fields common to every kind of security description."""

    sec_id: SecurityID | None = element('SECID', SecurityID)
    sec_name: str | None = element('SECNAME', String)
    ticker: str | None = element('TICKER', String, optional=True)
    fiid: str | None = element('FIID', String, optional=True)
    rating: str | None = element('RATING', String, optional=True)
    unit_price: Fraction | None = element('UNITPRICE', Amount, optional=True)
    dt_as_of: datetime | None = element('DTASOF', Date, optional=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    memo: str | None = element('MEMO', String, optional=True)


@dataclass(slots=True)
class AssetPortion(Aggregate):
    asset_class: AssetClass | None = element('ASSETCLASS', AssetClass)
    percent: Fraction | None = element('PERCENT', Amount)


@dataclass(slots=True)
class FiAssetPortion(Aggregate):
    fi_asset_class: str | None = element('FIASSETCLASS', String)
    percent: Fraction | None = element('PERCENT', Amount)


@dataclass(slots=True)
class DebtInfo(Variant):
    ELEMENT = 'DEBTINFO'

    sec_info: SecInfo | None = element('SECINFO', SecInfo)
    par_value: Fraction | None = element('PARVALUE', Amount)
    debt_type: DebtType | None = element('DEBTTYPE', DebtType)
    debt_class: DebtClass | None = element('DEBTCLASS', DebtClass, optional=True)
    coupon_rt: Fraction | None = element('COUPONRT', Amount, optional=True)
    dt_coupon: datetime | None = element('DTCOUPON', Date, optional=True)
    coupon_freq: CouponFreq | None = element('COUPONFREQ', CouponFreq, optional=True)
    call_price: Fraction | None = element('CALLPRICE', Amount, optional=True)
    yield_to_call: Fraction | None = element('YIELDTOCALL', Amount, optional=True)
    dt_call: datetime | None = element('DTCALL', Date, optional=True)
    call_type: CallType | None = element('CALLTYPE', CallType, optional=True)
    yield_to_mat: Fraction | None = element('YIELDTOMAT', Amount, optional=True)
    dt_mat: datetime | None = element('DTMAT', Date, optional=True)
    asset_class: AssetClass | None = element('ASSETCLASS', AssetClass, optional=True)
    fi_asset_class: str | None = element('FIASSETCLASS', String, optional=True)


@dataclass(slots=True)
class MFInfo(Variant):
    ELEMENT = 'MFINFO'

    sec_info: SecInfo | None = element('SECINFO', SecInfo)
    mf_type: MfType | None = element('MFTYPE', MfType, optional=True)
    yield_: Fraction | None = element('YIELD', Amount, optional=True)
    dt_yield_as_of: datetime | None = element('DTYIELDASOF', Date, optional=True)
    asset_classes: list[AssetPortion] = element('MFASSETCLASS>PORTION', AssetPortion, many=True)
    fi_asset_classes: list[FiAssetPortion] = element('FIMFASSETCLASS>FIPORTION', FiAssetPortion, many=True)


@dataclass(slots=True)
class OptInfo(Variant):
    ELEMENT = 'OPTINFO'

    sec_info: SecInfo | None = element('SECINFO', SecInfo)
    opt_type: OptType | None = element('OPTTYPE', OptType)
    strike_price: Fraction | None = element('STRIKEPRICE', Amount)
    dt_expire: datetime | None = element('DTEXPIRE', Date)
    sh_per_ctrct: int | None = element('SHPERCTRCT', Int)
    sec_id: SecurityID | None = element('SECID', SecurityID, optional=True)
    asset_class: AssetClass | None = element('ASSETCLASS', AssetClass, optional=True)
    fi_asset_class: str | None = element('FIASSETCLASS', String, optional=True)


@dataclass(slots=True)
class OtherInfo(Variant):
    ELEMENT = 'OTHERINFO'

    sec_info: SecInfo | None = element('SECINFO', SecInfo)
    type_desc: str | None = element('TYPEDESC', String, optional=True)
    asset_class: AssetClass | None = element('ASSETCLASS', AssetClass, optional=True)
    fi_asset_class: str | None = element('FIASSETCLASS', String, optional=True)


@dataclass(slots=True)
class StockInfo(Variant):
    ELEMENT = 'STOCKINFO'

    sec_info: SecInfo | None = element('SECINFO', SecInfo)
    stock_type: StockType | None = element('STOCKTYPE', StockType, optional=True)
    yield_: Fraction | None = element('YIELD', Amount, optional=True)
    dt_yield_as_of: datetime | None = element('DTYIELDASOF', Date, optional=True)
    asset_class: AssetClass | None = element('ASSETCLASS', AssetClass, optional=True)
    fi_asset_class: str | None = element('FIASSETCLASS', String, optional=True)


@dataclass(slots=True)
class SecurityList(Message):
    """Descriptions of the securities referenced by the other responses, SECLIST.

    Children are kept in document order as ``DebtInfo``, ``MFInfo``,
    ``OptInfo``, ``OtherInfo`` and ``StockInfo`` records.
    """

    ELEMENT = 'SECLIST'
    MESSAGE_TYPE = MessageType.SEC_LIST_RS
    VARIANTS = MappingProxyType(
        {cls.ELEMENT: cls for cls in (DebtInfo, MFInfo, OptInfo, OtherInfo, StockInfo)}
    )

    securities: list[Variant] = field(default_factory=list)

    @classmethod
    def from_element(cls, reader: TokenReader, start: StartElement) -> Self:
        securities = [decode_variant(reader, child, cls.VARIANTS, start.name) for child in child_elements(reader, start)]
        return cls(securities)

    def write_element(self, encoder: Encoder, name: str) -> None:
        encoder.start(name)
        for security in self.securities:
            write_variant(encoder, security, self.VARIANTS, name)
        encoder.end(name)

    def validate(self, version: OfxVersion) -> None:
        """SECLIST has no transaction id or status to check."""
