from datetime import timedelta, timezone
from fractions import Fraction

import pytest

from ofxcodec.common import CCAcct, Status
from ofxcodec.constants import OfxVersion, TrnType
from ofxcodec.creditcard import CCStatementRequest, CCStatementResponse
from ofxcodec.document import Request, parse_request, parse_response
from ofxcodec.errors import ValidityError
from ofxcodec.signon import SignonRequest
from ofxcodec.types import new_date, new_date_gmt

EDT = timezone(timedelta(hours=-4), 'EDT')
EST = timezone(timedelta(hours=-5), 'EST')

RESPONSE_102 = b"""OFXHEADER:100
DATA:OFXSGML
VERSION:102
SECURITY:NONE
ENCODING:USASCII
CHARSET:1252
COMPRESSION:NONE
OLDFILEUID:NONE
NEWFILEUID:NONE

<OFX><SIGNONMSGSRSV1><SONRS><STATUS><CODE>0<SEVERITY>INFO<MESSAGE>SUCCESS</STATUS><DTSERVER>20170331154648.331[-4:EDT]<LANGUAGE>ENG<FI><ORG>01<FID>81729</FI></SONRS></SIGNONMSGSRSV1><CREDITCARDMSGSRSV1><CCSTMTTRNRS><TRNUID>59e850ad-7448-b4ce-4b71-29057763b306<STATUS><CODE>0<SEVERITY>INFO</STATUS><CCSTMTRS><CURDEF>USD<CCACCTFROM><ACCTID>9283744488463775</CCACCTFROM><BANKTRANLIST><DTSTART>20161201154648.688[-5:EST]<DTEND>20170331154648.688[-4:EDT]<STMTTRN><TRNTYPE>DEBIT<DTPOSTED>20170209120000[0:GMT]<TRNAMT>-7.96<FITID>2017020924435657040207171600195<NAME>SLICE OF NY</STMTTRN><STMTTRN><TRNTYPE>CREDIT<DTPOSTED>20161228120000[0:GMT]<TRNAMT>3830.46<FITID>2016122823633637200000258482730<NAME>Payment Thank You Electro</STMTTRN><STMTTRN><TRNTYPE>DEBIT<DTPOSTED>20170327120000[0:GMT]<TRNAMT>-17.7<FITID>2017032724445727085300442885680<NAME>KROGER FUEL #9999</STMTTRN></BANKTRANLIST><LEDGERBAL><BALAMT>-9334<DTASOF>20170331080000.000[-4:EDT]</LEDGERBAL><AVAILBAL><BALAMT>7630.17<DTASOF>20170331080000.000[-4:EDT]</AVAILBAL></CCSTMTRS></CCSTMTTRNRS></CREDITCARDMSGSRSV1></OFX>"""


def _ok() -> Status:
    return Status(code=0, severity='INFO')


def test_parse_sgml_credit_card_response() -> None:
    response = parse_response(RESPONSE_102)

    assert response.version is OfxVersion.V102
    assert response.signon.status == Status(code=0, severity='INFO', message='SUCCESS')
    assert response.signon.dt_server == new_date(2017, 3, 31, 15, 46, 48, 331, zone=EDT)
    assert response.signon.org == '01'
    assert response.signon.fid == '81729'

    (statement,) = response.credit_card
    assert isinstance(statement, CCStatementResponse)
    assert statement.trnuid == '59e850ad-7448-b4ce-4b71-29057763b306'
    assert statement.status == _ok()
    assert statement.cur_def == 'USD'
    assert statement.cc_acct_from == CCAcct(acct_id='9283744488463775')
    assert statement.bank_tran_list.dt_start == new_date(2016, 12, 1, 15, 46, 48, 688, zone=EST)
    assert statement.bank_tran_list.dt_end == new_date(2017, 3, 31, 15, 46, 48, 688, zone=EDT)
    assert [(t.trn_type, t.trn_amt, t.name) for t in statement.bank_tran_list.transactions] == [
        (TrnType.DEBIT, Fraction(-796, 100), 'SLICE OF NY'),
        (TrnType.CREDIT, Fraction(383046, 100), 'Payment Thank You Electro'),
        (TrnType.DEBIT, Fraction(-1770, 100), 'KROGER FUEL #9999'),
    ]
    assert statement.bank_tran_list.transactions[0].dt_posted == new_date_gmt(2017, 2, 9, 12)
    assert statement.bal_amt == Fraction(-9334)
    assert statement.dt_as_of == new_date(2017, 3, 31, 8, zone=EDT)
    assert statement.avail_bal_amt == Fraction(763017, 100)


def test_sgml_credit_card_response_round_trip() -> None:
    response = parse_response(RESPONSE_102)
    encoded = response.marshal()
    assert encoded.startswith(b'OFXHEADER:100\nDATA:OFXSGML\nVERSION:102\n')
    assert parse_response(encoded) == response


def test_credit_card_request_round_trip() -> None:
    request = Request(
        version=OfxVersion.V220,
        signon=SignonRequest(
            dt_client=new_date_gmt(2020, 5, 1),
            user_id='me',
            user_pass='secret',
            app_id='QWIN',
            app_ver='2700',
        ),
        credit_card=[
            CCStatementRequest(
                trnuid='abc',
                cc_acct_from=CCAcct(acct_id='4111'),
                dt_start=new_date_gmt(2020, 1, 1),
                include=True,
                include_pending=True,
            )
        ],
    )
    encoded = request.marshal()
    assert b'<CCSTMTRQ>' in encoded
    assert b'<INCLUDEPENDING>Y</INCLUDEPENDING>' in encoded
    assert parse_request(encoded) == request


def test_credit_card_request_validation() -> None:
    with pytest.raises(ValidityError, match='CCACCTFROM'):
        CCStatementRequest(trnuid='1').validate(OfxVersion.V203)
    with pytest.raises(ValidityError, match='acct_id'):
        CCStatementRequest(trnuid='1', cc_acct_from=CCAcct()).validate(OfxVersion.V203)
    with pytest.raises(ValidityError, match='INCLUDEPENDING'):
        CCStatementRequest(trnuid='1', cc_acct_from=CCAcct(acct_id='1'), include_pending=True).validate(
            OfxVersion.V211
        )


def test_credit_card_error_response() -> None:
    CCStatementResponse(trnuid='1', status=Status(code=2000, severity='ERROR')).validate(OfxVersion.V203)
    with pytest.raises(ValidityError, match='CCACCTFROM'):
        CCStatementResponse(trnuid='1', status=_ok(), cur_def='USD').validate(OfxVersion.V203)
