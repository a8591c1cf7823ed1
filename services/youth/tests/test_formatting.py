from datetime import datetime, timedelta, timezone

import pytest
from mcp_youth.errors import UpstreamApiError
from mcp_youth.formatting import (
    NO_RESULTS,
    as_item_list,
    format_activities,
    format_error,
    format_facility_groups,
    format_number,
    format_sido_list,
    format_sigungu_list,
    format_time,
)


def _result(items, total=None):
    return {
        "totalCount": total if total is not None else len(as_item_list(items)),
        "items": items,
        "pageNo": 1,
        "numOfRows": 10,
    }


@pytest.mark.parametrize(
    "items, expected",
    [
        ([], []),
        ("", []),
        (None, []),
        ({"a": "1"}, [{"a": "1"}]),
        ([{"a": "1"}, {"a": "2"}], [{"a": "1"}, {"a": "2"}]),
    ],
)
def test_as_item_list(items, expected):
    assert as_item_list(items) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, "5"),
        (5.0, "5"),
        (2.5, "2.5"),
        (-3, "-3"),
        (0.1 + 0.2, str(0.1 + 0.2)),
        (1e20, "100000000000000000000"),
        (1e20 * 10, "1e+21"),
        (-1e21, "-1e+21"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_error():
    assert format_error(UpstreamApiError("API 오류: LIMITED")) == "오류: API 오류: LIMITED"


def test_format_time_two_representations():
    kst = timezone(timedelta(hours=9))
    now = datetime(2025, 3, 4, 15, 6, 7, 890000, tzinfo=kst)

    text = format_time(now)

    iso_line, local_line = text.split("\n")
    assert iso_line == "현재 시간: 2025-03-04T06:06:07.890Z"
    assert local_line.startswith("로컬 시간: ")


def test_format_sido_list():
    text = format_sido_list(
        _result(
            [
                {"ctpvNm": "서울특별시", "ctpvCode": "11"},
                {"ctpvNm": "부산광역시", "ctpvCode": "26"},
            ]
        )
    )

    assert "시도 목록 (총 2건" in text
    assert "- 서울특별시 (코드: 11)" in text
    assert "- 부산광역시 (코드: 26)" in text


def test_format_sido_list_single_mapping():
    text = format_sido_list(_result({"ctpvNm": "제주특별자치도", "ctpvCode": "50"}))

    assert "총 1건" in text
    assert "- 제주특별자치도 (코드: 50)" in text


def test_format_sigungu_list_generic_fields():
    text = format_sigungu_list(
        _result([{"sigunguNm": "종로구", "sigunguCode": "11110", "etc": ""}]), "서울"
    )

    assert text.startswith("서울 시군구 목록")
    assert "1." in text
    assert "시군구명: 종로구" in text
    assert "시군구코드: 11110" in text
    # Empty values are skipped
    assert "etc" not in text


def test_format_activities():
    text = format_activities(
        _result(
            {
                "actTitle": "여름방학 과학캠프",
                "organNm": "서울시립청소년센터",
                "actBeginDt": "20250721",
                "actEndDt": "20250725",
                "actPlace": "본관 2층",
                "actTarget": "중학생",
                "actPart": "과학정보",
                "youthPolicyShortIntro": "실험 중심 캠프",
            }
        )
    )

    assert "청소년 활동 프로그램 검색 결과 (총 1건, 페이지 1, 10건씩)" in text
    assert "1. 여름방학 과학캠프" in text
    assert "기관: 서울시립청소년센터" in text
    assert "기간: 20250721 ~ 20250725" in text
    assert "장소: 본관 2층" in text
    assert "대상: 중학생" in text
    assert "분야: 과학정보" in text
    assert "소개: 실험 중심 캠프" in text


def test_format_activities_missing_title():
    text = format_activities(_result([{"organNm": "기관"}, {"actTitle": "둘째"}]))

    assert "1. (제목 없음)" in text
    assert "2. 둘째" in text


@pytest.mark.parametrize(
    "formatter",
    [
        format_activities,
        format_facility_groups,
        format_sido_list,
        lambda result: format_sigungu_list(result, "서울"),
    ],
)
def test_empty_results(formatter):
    assert NO_RESULTS in formatter(_result([], total=0))
