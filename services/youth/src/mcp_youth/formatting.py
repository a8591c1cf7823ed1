"""
Text report formatters.

Each function takes the plain values or client result and returns the text
sent back to the MCP caller. Nothing here performs I/O.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union


# Korean labels for upstream field names shown in generic reports
FIELD_LABELS = {
    "ctpvNm": "시도명",
    "ctpvCode": "시도코드",
    "sido": "시도",
    "sigungu": "시군구",
    "sigunguNm": "시군구명",
    "sigunguCode": "시군구코드",
    "stName": "기관명",
    "gName": "기관유형",
    "organNm": "기관명",
    "addr": "주소",
    "tel": "전화번호",
    "homepage": "홈페이지",
}

NO_RESULTS = "검색 결과가 없습니다."


def as_item_list(items: Union[Dict[str, Any], List[Any], str, None]) -> List[Any]:
    """Return the items of a client result as a list, whatever cardinality it had."""
    if not items:
        return []
    if isinstance(items, list):
        return items
    return [items]


def format_number(value: Union[int, float]) -> str:
    """
    Render a number without a trailing ".0" when it is integral.

    From 1e21 upward the exponent form is kept (1e+21), as JavaScript prints it.
    """
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def format_error(error: Exception) -> str:
    return f"오류: {error}"


def format_time(now: Optional[datetime] = None) -> str:
    """Render a timestamp as ISO-8601 UTC plus Korean-style local time."""
    if now is None:
        now = datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.astimezone()

    utc = now.astimezone(timezone.utc)
    iso = utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    local = now.astimezone()
    meridiem = "오전" if local.hour < 12 else "오후"
    hour = local.hour % 12 or 12
    local_text = (
        f"{local.year}. {local.month}. {local.day}. "
        f"{meridiem} {hour}:{local.minute:02d}:{local.second:02d}"
    )
    return f"현재 시간: {iso}\n로컬 시간: {local_text}"


def _summary(title: str, result: Dict[str, Any]) -> str:
    return (
        f"{title} (총 {result.get('totalCount', 0)}건, "
        f"페이지 {result.get('pageNo')}, {result.get('numOfRows')}건씩)"
    )


def _generic_lines(item: Any) -> List[str]:
    if not isinstance(item, dict):
        return [f"   - {item}"]
    return [
        f"   - {FIELD_LABELS.get(key, key)}: {value}"
        for key, value in item.items()
        if value not in (None, "")
    ]


def _generic_report(title: str, result: Dict[str, Any]) -> str:
    items = as_item_list(result.get("items"))
    lines = [_summary(title, result), ""]
    if not items:
        lines.append(NO_RESULTS)
        return "\n".join(lines)

    for index, item in enumerate(items, start=1):
        lines.append(f"{index}.")
        lines.extend(_generic_lines(item))
    return "\n".join(lines)


def format_sido_list(result: Dict[str, Any]) -> str:
    items = as_item_list(result.get("items"))
    lines = [_summary("시도 목록", result), ""]
    if not items:
        lines.append(NO_RESULTS)
        return "\n".join(lines)

    for item in items:
        if isinstance(item, dict) and ("ctpvNm" in item or "ctpvCode" in item):
            lines.append(
                f"- {item.get('ctpvNm') or '(이름 없음)'} "
                f"(코드: {item.get('ctpvCode') or '-'})"
            )
        else:
            lines.extend(_generic_lines(item))
    return "\n".join(lines)


def format_sigungu_list(result: Dict[str, Any], sido: str) -> str:
    return _generic_report(f"{sido} 시군구 목록", result)


def format_activities(result: Dict[str, Any]) -> str:
    items = as_item_list(result.get("items"))
    lines = [_summary("청소년 활동 프로그램 검색 결과", result), ""]
    if not items:
        lines.append(NO_RESULTS)
        return "\n".join(lines)

    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            lines.append(f"{index}. {item}")
            continue
        lines.append(f"{index}. {item.get('actTitle') or '(제목 없음)'}")
        if item.get("organNm"):
            lines.append(f"   - 기관: {item['organNm']}")
        if item.get("actBeginDt") or item.get("actEndDt"):
            lines.append(
                f"   - 기간: {item.get('actBeginDt', '')} ~ {item.get('actEndDt', '')}"
            )
        if item.get("actPlace"):
            lines.append(f"   - 장소: {item['actPlace']}")
        if item.get("actTarget"):
            lines.append(f"   - 대상: {item['actTarget']}")
        if item.get("actPart"):
            lines.append(f"   - 분야: {item['actPart']}")
        if item.get("youthPolicyShortIntro"):
            lines.append(f"   - 소개: {item['youthPolicyShortIntro']}")
        lines.append("")
    return "\n".join(lines).rstrip()


def format_facility_groups(result: Dict[str, Any]) -> str:
    return _generic_report("청소년 시설 그룹 목록", result)
