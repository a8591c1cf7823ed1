import pytest
from mcp_youth.errors import ParseError
from mcp_youth.xml_parser import parse_xml


def test_single_item_is_not_wrapped_in_list():
    xml = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
    <response>
        <body>
            <items>
                <item><ctpvNm>서울특별시</ctpvNm><ctpvCode>11</ctpvCode></item>
            </items>
        </body>
    </response>"""

    parsed = parse_xml(xml)

    assert parsed == {
        "response": {
            "body": {"items": {"item": {"ctpvNm": "서울특별시", "ctpvCode": "11"}}}
        }
    }


def test_repeated_items_become_list_in_document_order():
    xml = """<response><body><items>
        <item><ctpvNm>서울특별시</ctpvNm></item>
        <item><ctpvNm>부산광역시</ctpvNm></item>
        <item><ctpvNm>대구광역시</ctpvNm></item>
    </items></body></response>"""

    items = parse_xml(xml)["response"]["body"]["items"]["item"]

    assert isinstance(items, list)
    assert [item["ctpvNm"] for item in items] == ["서울특별시", "부산광역시", "대구광역시"]


def test_attributes_are_dropped_and_text_trimmed():
    xml = '<response><header code="x"><resultCode type="s">  00 \n</resultCode></header></response>'

    assert parse_xml(xml) == {"response": {"header": {"resultCode": "00"}}}


def test_empty_element_becomes_empty_string():
    xml = "<response><body><items/><totalCount>0</totalCount></body></response>"

    body = parse_xml(xml)["response"]["body"]

    assert body["items"] == ""
    assert body["totalCount"] == "0"


@pytest.mark.parametrize(
    "text",
    [
        "<response><header></response>",
        "not xml at all",
        "<a><b></a></b>",
        "",
        "   ",
    ],
)
def test_malformed_input_raises_parse_error(text):
    with pytest.raises(ParseError):
        parse_xml(text)
