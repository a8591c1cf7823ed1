"""Static resource documents and prompt templates served by both MCP servers."""

from typing import Dict, NamedTuple

from mcp_youth.errors import UnknownOperationError


class Document(NamedTuple):
    uri: str
    name: str
    description: str
    text: str


# (code, name) pairs of the 17 sido used by the API's ``sido`` filter
SIDO_CODES = [
    ("11", "서울특별시"),
    ("26", "부산광역시"),
    ("27", "대구광역시"),
    ("28", "인천광역시"),
    ("29", "광주광역시"),
    ("30", "대전광역시"),
    ("31", "울산광역시"),
    ("36", "세종특별자치시"),
    ("41", "경기도"),
    ("43", "충청북도"),
    ("44", "충청남도"),
    ("46", "전라남도"),
    ("47", "경상북도"),
    ("48", "경상남도"),
    ("50", "제주특별자치도"),
    ("51", "강원특별자치도"),
    ("52", "전북특별자치도"),
]


def _sido_table() -> str:
    lines = [
        "시도 코드표",
        "",
        "코드 | 시도명",
        "-----|------------",
    ]
    lines.extend(f"{code}   | {name}" for code, name in SIDO_CODES)
    lines.append("")
    lines.append(
        "sido 인자에는 시도명을 그대로 쓰거나 '서울', '부산'처럼 줄여 쓸 수 있습니다."
    )
    return "\n".join(lines)


DEMO_INFO = Document(
    uri="test://info",
    name="서버 정보",
    description="MCP 테스트 서버의 기본 정보",
    text="""MCP 테스트 서버 v1.0.0

이 서버는 MCP (Model Context Protocol)의 기본 기능을 테스트하기 위한 서버입니다.

제공 기능:
- Tools: echo, calculate, get_time
- Resources: info, greeting
- Prompts: welcome, help""",
)

DEMO_GREETING = Document(
    uri="test://greeting",
    name="인사말",
    description="환영 메시지",
    text=(
        "안녕하세요! MCP 테스트 서버에 오신 것을 환영합니다. "
        "이 서버는 MCP 프로토콜의 기본 기능들을 시연합니다."
    ),
)

YOUTH_INFO = Document(
    uri="youth://info",
    name="서버 정보",
    description="청소년 활동 정보 MCP 서버 소개",
    text="""청소년 활동 정보 MCP 서버

공공데이터포털의 여성가족부 청소년활동정보 서비스를 MCP 도구로 제공합니다.

제공 기능:
- Tools: get_sido_list, get_sigungu_list, search_youth_activities, get_youth_facility_groups
- Resources: info, guide, sido-codes
- Prompts: find_activities, facility_guide""",
)

YOUTH_GUIDE = Document(
    uri="youth://guide",
    name="사용 가이드",
    description="청소년 활동 정보 도구 사용법",
    text="""청소년 활동 정보 서버 사용 가이드

1. get_sido_list
   시도 목록을 조회합니다. 다른 도구의 sido 인자에 쓸 이름을 확인할 때 사용하세요.

2. get_sigungu_list (sido 필수)
   시도에 속한 시군구 목록을 조회합니다.

3. search_youth_activities
   청소년 활동 프로그램을 검색합니다.
   - program_name: 프로그램명
   - organization: 주최 기관명
   - sido: 시도명
   - start_date / end_date: 활동 기간 (YYYYMMDD)

4. get_youth_facility_groups
   청소년 시설 그룹을 조회합니다.
   - sido: 시도명
   - facility_name: 기관명
   - group_type: 기관유형명

모든 목록 도구는 page_no(기본 1)와 num_of_rows(시도/시군구 기본 100, 검색 기본 10)를 받습니다.""",
)

YOUTH_SIDO_CODES = Document(
    uri="youth://sido-codes",
    name="시도 코드표",
    description="시도 이름과 코드 참조표",
    text=_sido_table(),
)


DOCUMENTS: Dict[str, Document] = {
    document.uri: document
    for document in (
        DEMO_INFO,
        DEMO_GREETING,
        YOUTH_INFO,
        YOUTH_GUIDE,
        YOUTH_SIDO_CODES,
    )
}


def read_document(uri: str) -> str:
    """Return the text of a static document, or raise for unknown URIs."""
    try:
        return DOCUMENTS[uri].text
    except KeyError:
        raise UnknownOperationError("resource", uri) from None


def welcome_prompt(name: str = "사용자") -> str:
    name = name or "사용자"
    return f"""{name}님, MCP 테스트 서버에 오신 것을 환영합니다!

이 서버는 다음과 같은 기능을 제공합니다:
- 메시지 에코
- 간단한 계산기
- 현재 시간 조회
- 서버 정보 및 인사말 리소스

무엇을 도와드릴까요?"""


DEMO_HELP_PROMPT = """MCP 테스트 서버 사용 가이드

📌 사용 가능한 도구 (Tools):
1. echo - 메시지를 그대로 반환
2. calculate - 수학 계산 (add, subtract, multiply, divide)
3. get_time - 현재 시간 조회

📦 사용 가능한 리소스 (Resources):
1. test://info - 서버 정보
2. test://greeting - 환영 메시지

💬 사용 가능한 프롬프트 (Prompts):
1. welcome - 환영 메시지
2. help - 이 도움말

각 기능을 자유롭게 사용해보세요!"""


def find_activities_prompt(region: str = "서울") -> str:
    region = region or "서울"
    return f"""{region} 지역에서 참여할 수 있는 청소년 활동 프로그램을 찾아주세요.

1. get_sigungu_list 도구로 {region}의 시군구를 확인하세요.
2. search_youth_activities 도구에 sido="{region}"를 넣어 프로그램을 검색하세요.
3. 결과를 활동 기간, 대상, 분야별로 정리해서 알려주세요."""


def facility_guide_prompt(region: str = "서울") -> str:
    region = region or "서울"
    return f"""{region} 지역의 청소년 시설을 안내해주세요.

1. get_youth_facility_groups 도구에 sido="{region}"를 넣어 시설 그룹을 조회하세요.
2. 기관 유형별로 묶어서 기관명과 주요 정보를 정리해주세요.
3. 결과가 없으면 youth://sido-codes 리소스에서 시도명을 확인한 뒤 다시 조회하세요."""
