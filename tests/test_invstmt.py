from fractions import Fraction

import pytest

from ofxcodec.aggregate import Encoder
from ofxcodec.common import Balance, InvAcct, Status
from ofxcodec.constants import (
    AssetClass,
    BalType,
    BuyType,
    Duration,
    IncomeType,
    OfxVersion,
    OptType,
    PosType,
    Restriction,
    SellType,
    SubAcctType,
    TrnType,
    UnitType,
)
from ofxcodec.document import Request, parse_request, parse_response
from ofxcodec.errors import StructuralParseError, ValidityError
from ofxcodec.invstmt import (
    OO,
    BuyStock,
    Income,
    InvBuy,
    InvPosition,
    InvStatementRequest,
    InvStatementResponse,
    InvTran,
    InvTranList,
    OOBuyMF,
    OOBuyStock,
    OOList,
    PositionList,
    PosOpt,
    PosStock,
    SellMF,
)
from ofxcodec.seclist import MFInfo, OptInfo, SecurityID, SecurityList, StockInfo
from ofxcodec.signon import SignonRequest
from ofxcodec.tokens import TokenReader
from ofxcodec.types import new_date_gmt

RESPONSE_203 = b"""<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<?OFX OFXHEADER="200" VERSION="203" SECURITY="NONE" OLDFILEUID="NONE" NEWFILEUID="NONE"?>
<OFX>
  <SIGNONMSGSRSV1>
    <SONRS>
      <STATUS><CODE>0</CODE><SEVERITY>INFO</SEVERITY></STATUS>
      <DTSERVER>20170401201244</DTSERVER>
      <LANGUAGE>ENG</LANGUAGE>
      <FI><ORG>INVSTRUS</ORG><FID>9999</FID></FI>
    </SONRS>
  </SIGNONMSGSRSV1>
  <INVSTMTMSGSRSV1>
    <INVSTMTTRNRS>
      <TRNUID>1a0117ad-692b-4c6a-a21b-020d37d34d49</TRNUID>
      <STATUS><CODE>0</CODE><SEVERITY>INFO</SEVERITY></STATUS>
      <INVSTMTRS>
        <DTASOF>20170331000000</DTASOF>
        <CURDEF>USD</CURDEF>
        <INVACCTFROM><BROKERID>invstrus.com</BROKERID><ACCTID>91827364</ACCTID></INVACCTFROM>
        <INVTRANLIST>
          <DTSTART>20170101000000</DTSTART>
          <DTEND>20170331000000</DTEND>
          <BUYSTOCK>
            <INVBUY>
              <INVTRAN><FITID>729483191</FITID><DTTRADE>20170203</DTTRADE><DTSETTLE>20170207</DTSETTLE></INVTRAN>
              <SECID><UNIQUEID>78462F103</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
              <UNITS>100</UNITS>
              <UNITPRICE>229.00</UNITPRICE>
              <COMMISSION>9.00</COMMISSION>
              <TOTAL>-22909.00</TOTAL>
              <SUBACCTSEC>CASH</SUBACCTSEC>
              <SUBACCTFUND>CASH</SUBACCTFUND>
            </INVBUY>
            <BUYTYPE>BUY</BUYTYPE>
          </BUYSTOCK>
          <INVBANKTRAN>
            <STMTTRN>
              <TRNTYPE>CREDIT</TRNTYPE>
              <DTPOSTED>20170120</DTPOSTED>
              <DTUSER>20170118</DTUSER>
              <DTAVAIL>20170123</DTAVAIL>
              <TRNAMT>22000.00</TRNAMT>
              <FITID>993838</FITID>
              <NAME>DEPOSIT</NAME>
              <MEMO>CHECK 19980</MEMO>
            </STMTTRN>
            <SUBACCTFUND>CASH</SUBACCTFUND>
          </INVBANKTRAN>
        </INVTRANLIST>
        <INVPOSLIST>
          <POSSTOCK>
            <INVPOS>
              <SECID><UNIQUEID>78462F103</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
              <HELDINACCT>CASH</HELDINACCT>
              <POSTYPE>LONG</POSTYPE>
              <UNITS>200</UNITS>
              <UNITPRICE>235.74</UNITPRICE>
              <MKTVAL>47148.00</MKTVAL>
              <DTPRICEASOF>20170331160000</DTPRICEASOF>
              <MEMO>Price as of previous close</MEMO>
            </INVPOS>
          </POSSTOCK>
          <POSOPT>
            <INVPOS>
              <SECID><UNIQUEID>129887339</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
              <HELDINACCT>CASH</HELDINACCT>
              <POSTYPE>LONG</POSTYPE>
              <UNITS>1</UNITS>
              <UNITPRICE>3</UNITPRICE>
              <MKTVAL>300</MKTVAL>
              <DTPRICEASOF>20170331160000</DTPRICEASOF>
            </INVPOS>
          </POSOPT>
        </INVPOSLIST>
        <INVBAL>
          <AVAILCASH>16.73</AVAILCASH>
          <MARGINBALANCE>-819.20</MARGINBALANCE>
          <SHORTBALANCE>0</SHORTBALANCE>
          <BALLIST>
            <BAL>
              <NAME>Sweep Int Rate</NAME>
              <DESC>Current interest rate for sweep account balances</DESC>
              <BALTYPE>PERCENT</BALTYPE>
              <VALUE>0.25</VALUE>
              <DTASOF>20170401</DTASOF>
            </BAL>
          </BALLIST>
        </INVBAL>
        <INVOOLIST>
          <OOBUYMF>
            <OO>
              <FITID>76464632</FITID>
              <SECID><UNIQUEID>922908645</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
              <DTPLACED>20170310124445</DTPLACED>
              <UNITS>10</UNITS>
              <SUBACCT>CASH</SUBACCT>
              <DURATION>GOODTILCANCEL</DURATION>
              <RESTRICTION>NONE</RESTRICTION>
              <LIMITPRICE>168.50</LIMITPRICE>
            </OO>
            <BUYTYPE>BUY</BUYTYPE>
            <UNITTYPE>SHARES</UNITTYPE>
          </OOBUYMF>
          <OOBUYSTOCK>
            <OO>
              <FITID>999387423</FITID>
              <SECID><UNIQUEID>899422348</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
              <DTPLACED>20170324031900</DTPLACED>
              <UNITS>25</UNITS>
              <SUBACCT>CASH</SUBACCT>
              <DURATION>GOODTILCANCEL</DURATION>
              <RESTRICTION>ALLORNONE</RESTRICTION>
              <LIMITPRICE>19.75</LIMITPRICE>
            </OO>
            <BUYTYPE>BUY</BUYTYPE>
          </OOBUYSTOCK>
        </INVOOLIST>
      </INVSTMTRS>
    </INVSTMTTRNRS>
  </INVSTMTMSGSRSV1>
  <SECLISTMSGSRSV1>
    <SECLIST>
      <STOCKINFO>
        <SECINFO>
          <SECID><UNIQUEID>78462F103</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
          <SECNAME>S&amp;P 500 ETF</SECNAME>
          <TICKER>SPY</TICKER>
          <FIID>99184</FIID>
        </SECINFO>
        <YIELD>1.92</YIELD>
        <ASSETCLASS>OTHER</ASSETCLASS>
      </STOCKINFO>
      <OPTINFO>
        <SECINFO>
          <SECID><UNIQUEID>129887339</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
          <SECNAME>John's Fertilizer Puts</SECNAME>
          <TICKER>FERTP</TICKER>
          <FIID>882919</FIID>
        </SECINFO>
        <OPTTYPE>PUT</OPTTYPE>
        <STRIKEPRICE>79.00</STRIKEPRICE>
        <DTEXPIRE>20170901</DTEXPIRE>
        <SHPERCTRCT>100</SHPERCTRCT>
        <SECID><UNIQUEID>983322180</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
        <ASSETCLASS>LARGESTOCK</ASSETCLASS>
      </OPTINFO>
      <MFINFO>
        <SECINFO>
          <SECID><UNIQUEID>922908645</UNIQUEID><UNIQUEIDTYPE>CUSIP</UNIQUEIDTYPE></SECID>
          <SECNAME>Mid-Cap Index Fund Admiral Shares</SECNAME>
          <TICKER>VIMAX</TICKER>
        </SECINFO>
      </MFINFO>
    </SECLIST>
  </SECLISTMSGSRSV1>
</OFX>
"""

SGML_TRANLIST = (
    '<INVTRANLIST><DTSTART>20170101<DTEND>20170331'
    '<INCOME><INVTRAN><FITID>1<DTTRADE>20170110</INVTRAN>'
    '<SECID><UNIQUEID>1<UNIQUEIDTYPE>CUSIP</SECID><INCOMETYPE>DIV<TOTAL>12.5'
    '<SUBACCTSEC>CASH<SUBACCTFUND>CASH</INCOME>'
    '<INVBANKTRAN><STMTTRN><TRNTYPE>INT<DTPOSTED>20170115<TRNAMT>0.42<FITID>2</STMTTRN>'
    '<SUBACCTFUND>CASH</INVBANKTRAN>'
    '<SELLMF><INVSELL><INVTRAN><FITID>3<DTTRADE>20170120</INVTRAN>'
    '<SECID><UNIQUEID>2<UNIQUEIDTYPE>CUSIP</SECID><UNITS>-5<UNITPRICE>10<TOTAL>50'
    '<SUBACCTSEC>CASH<SUBACCTFUND>CASH</INVSELL><SELLTYPE>SELL</SELLMF>'
    '</INVTRANLIST>'
)


def _cusip(value: str) -> SecurityID:
    return SecurityID(unique_id=value, unique_id_type='CUSIP')


def test_parse_investment_statement() -> None:
    response = parse_response(RESPONSE_203)
    assert response.signon.org == 'INVSTRUS'

    (statement,) = response.inv_stmt
    assert isinstance(statement, InvStatementResponse)
    assert statement.dt_as_of == new_date_gmt(2017, 3, 31)
    assert statement.inv_acct_from == InvAcct(broker_id='invstrus.com', acct_id='91827364')

    tran_list = statement.inv_tran_list
    assert tran_list.dt_start == new_date_gmt(2017, 1, 1)
    assert tran_list.inv_transactions == [
        BuyStock(
            inv_buy=InvBuy(
                inv_tran=InvTran(
                    fitid='729483191',
                    dt_trade=new_date_gmt(2017, 2, 3),
                    dt_settle=new_date_gmt(2017, 2, 7),
                ),
                sec_id=_cusip('78462F103'),
                units=Fraction(100),
                unit_price=Fraction(229),
                commission=Fraction(9),
                total=Fraction(-22909),
                sub_acct_sec=SubAcctType.CASH,
                sub_acct_fund=SubAcctType.CASH,
            ),
            buy_type=BuyType.BUY,
        )
    ]
    (bank_transaction,) = tran_list.bank_transactions
    assert bank_transaction.sub_acct_fund is SubAcctType.CASH
    assert bank_transaction.transactions[0].trn_type is TrnType.CREDIT
    assert bank_transaction.transactions[0].memo == 'CHECK 19980'

    positions = statement.inv_pos_list.positions
    assert [type(position) for position in positions] == [PosStock, PosOpt]
    assert positions[0].inv_pos == InvPosition(
        sec_id=_cusip('78462F103'),
        held_in_acct=SubAcctType.CASH,
        pos_type=PosType.LONG,
        units=Fraction(200),
        unit_price=Fraction(23574, 100),
        mkt_val=Fraction(47148),
        dt_price_as_of=new_date_gmt(2017, 3, 31, 16),
        memo='Price as of previous close',
    )

    assert statement.inv_bal.avail_cash == Fraction(1673, 100)
    assert statement.inv_bal.short_balance == 0
    assert statement.inv_bal.bal_list == [
        Balance(
            name='Sweep Int Rate',
            desc='Current interest rate for sweep account balances',
            bal_type=BalType.PERCENT,
            value=Fraction(1, 4),
            dt_as_of=new_date_gmt(2017, 4, 1),
        )
    ]

    orders = statement.inv_oo_list.orders
    assert [type(order) for order in orders] == [OOBuyMF, OOBuyStock]
    assert orders[0].unit_type is UnitType.SHARES
    assert orders[0].oo.duration is Duration.GOODTILCANCEL
    assert orders[1].oo.restriction is Restriction.ALLORNONE
    assert orders[1].oo.limit_price == Fraction(1975, 100)


def test_parse_security_list_alongside_statement() -> None:
    response = parse_response(RESPONSE_203)
    (securities,) = response.sec_list
    assert isinstance(securities, SecurityList)
    stock, option, fund = securities.securities
    assert isinstance(stock, StockInfo)
    assert stock.sec_info.sec_name == 'S&P 500 ETF'
    assert stock.yield_ == Fraction(192, 100)
    assert stock.asset_class is AssetClass.OTHER
    assert isinstance(option, OptInfo)
    assert option.opt_type is OptType.PUT
    assert option.sh_per_ctrct == 100
    assert option.sec_id == _cusip('983322180')
    assert option.sec_info.sec_id == _cusip('129887339')
    assert isinstance(fund, MFInfo)
    assert fund.sec_info.ticker == 'VIMAX'


def test_investment_statement_round_trip() -> None:
    response = parse_response(RESPONSE_203)
    assert parse_response(response.marshal()) == response
    response.version = OfxVersion.V102
    assert parse_response(response.marshal()) == response


def test_transaction_list_keeps_kinds_apart() -> None:
    reader = TokenReader(SGML_TRANLIST, strict=False)
    tran_list = InvTranList.from_element(reader, reader.expect_start('INVTRANLIST'))

    assert [type(item) for item in tran_list.inv_transactions] == [Income, SellMF]
    income = tran_list.inv_transactions[0]
    assert income.income_type is IncomeType.DIV
    assert income.total == Fraction(25, 2)
    assert tran_list.inv_transactions[1].sell_type is SellType.SELL
    assert tran_list.inv_transactions[1].inv_sell.units == -5
    (bank_transaction,) = tran_list.bank_transactions
    assert bank_transaction.transactions[0].trn_amt == Fraction(42, 100)


def test_transaction_list_writes_investment_transactions_first() -> None:
    reader = TokenReader(SGML_TRANLIST, strict=False)
    tran_list = InvTranList.from_element(reader, reader.expect_start('INVTRANLIST'))

    encoder = Encoder(indent=None)
    tran_list.write_element(encoder, 'INVTRANLIST')
    text = encoder.getvalue()
    assert text.startswith('<INVTRANLIST><DTSTART>20170101000000.000[0]</DTSTART>')
    assert text.index('<INCOME>') < text.index('<SELLMF>') < text.index('<INVBANKTRAN>')

    reader = TokenReader(text)
    assert InvTranList.from_element(reader, reader.expect_start('INVTRANLIST')) == tran_list


def test_transaction_list_requires_dates() -> None:
    with pytest.raises(ValidityError, match='DTSTART and DTEND'):
        InvTranList(dt_start=new_date_gmt(2017, 1, 1)).write_element(Encoder(), 'INVTRANLIST')


def test_transaction_list_rejects_unknown_children() -> None:
    reader = TokenReader('<INVTRANLIST><DTSTART>20170101</DTSTART><BOGUS></BOGUS></INVTRANLIST>')
    with pytest.raises(StructuralParseError, match='invalid INVTRANLIST child <BOGUS>'):
        InvTranList.from_element(reader, reader.expect_start('INVTRANLIST'))


def test_position_and_order_lists_check_child_types() -> None:
    reader = TokenReader('<INVPOSLIST><POSFOO></POSFOO></INVPOSLIST>')
    with pytest.raises(StructuralParseError, match='<POSFOO>'):
        PositionList.from_element(reader, reader.expect_start('INVPOSLIST'))

    with pytest.raises(ValidityError, match='BuyStock'):
        PositionList(positions=[BuyStock()]).write_element(Encoder(), 'INVPOSLIST')
    with pytest.raises(ValidityError, match='PosStock'):
        OOList(orders=[PosStock()]).write_element(Encoder(), 'INVOOLIST')

    encoder = Encoder(indent=None)
    OOList().write_element(encoder, 'INVOOLIST')
    assert encoder.getvalue() == '<INVOOLIST></INVOOLIST>'
    assert OO().fitid is None


def test_investment_statement_request_round_trip() -> None:
    request = Request(
        version=OfxVersion.V203,
        signon=SignonRequest(
            dt_client=new_date_gmt(2017, 4, 1),
            user_id='investor',
            user_pass='hunter2',
            app_id='QWIN',
            app_ver='2700',
        ),
        inv_stmt=[
            InvStatementRequest(
                trnuid='382827d6-e2d0-4396-bf3b-665979285420',
                inv_acct_from=InvAcct(broker_id='fi.example.com', acct_id='82736664'),
                dt_start=new_date_gmt(2016, 1, 1),
                include=True,
                include_oo=True,
                include_pos=True,
                include_balance=True,
            )
        ],
    )
    encoded = request.marshal()
    assert b'<INCPOS>\n                    <INCLUDE>Y</INCLUDE>\n                </INCPOS>' in encoded
    assert b'<INC401K>' not in encoded
    assert parse_request(encoded) == request


def test_investment_statement_validation() -> None:
    InvStatementRequest(trnuid='1').validate(OfxVersion.V203)
    InvStatementResponse(trnuid='1', status=Status(code=12255, severity='ERROR')).validate(OfxVersion.V203)
    InvStatementResponse(trnuid='1', status=Status(code=0, severity='INFO')).validate(OfxVersion.V203)

    with pytest.raises(ValidityError, match='TRNUID'):
        InvStatementRequest().validate(OfxVersion.V203)
    with pytest.raises(ValidityError, match='UID'):
        InvStatementResponse(trnuid='x' * 40, status=Status(code=0, severity='INFO')).validate(OfxVersion.V203)
    with pytest.raises(ValidityError, match='STATUS'):
        InvStatementResponse(trnuid='1').validate(OfxVersion.V203)


def test_parse_investment_statement_without_default_currency() -> None:
    data = b"""<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<?OFX OFXHEADER="200" VERSION="203" SECURITY="NONE" OLDFILEUID="NONE" NEWFILEUID="NONE"?>
<OFX>
  <SIGNONMSGSRSV1>
    <SONRS>
      <STATUS><CODE>0</CODE><SEVERITY>INFO</SEVERITY></STATUS>
      <DTSERVER>20170401201244</DTSERVER>
      <LANGUAGE>ENG</LANGUAGE>
    </SONRS>
  </SIGNONMSGSRSV1>
  <INVSTMTMSGSRSV1>
    <INVSTMTTRNRS>
      <TRNUID>1</TRNUID>
      <STATUS><CODE>0</CODE><SEVERITY>INFO</SEVERITY></STATUS>
      <INVSTMTRS>
        <DTASOF>20170331000000</DTASOF>
        <INVACCTFROM><BROKERID>invstrus.com</BROKERID><ACCTID>91827364</ACCTID></INVACCTFROM>
      </INVSTMTRS>
    </INVSTMTTRNRS>
  </INVSTMTMSGSRSV1>
</OFX>
"""
    response = parse_response(data)
    (statement,) = response.inv_stmt
    assert isinstance(statement, InvStatementResponse)
    assert statement.cur_def is None
    assert statement.dt_as_of == new_date_gmt(2017, 3, 31)
    assert statement.inv_acct_from == InvAcct(broker_id='invstrus.com', acct_id='91827364')
