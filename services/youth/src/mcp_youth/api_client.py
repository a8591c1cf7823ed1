import httpx
import logging
import re
import urllib.parse
from typing import Dict, Optional, Any

from mcp_youth.errors import (
    ParseError,
    TransportError,
    UnexpectedFormatError,
    UpstreamApiError,
    ValidationError,
)
from mcp_youth.xml_parser import parse_xml


logger = logging.getLogger("youth_api_client")

_DATE_PATTERN = re.compile(r"^\d{8}$")


def _check_paging(page_no: int, num_of_rows: int) -> None:
    if page_no < 1:
        raise ValidationError(
            f"pageNo는 1 이상이어야 합니다 (입력값: {page_no})"
        )
    if num_of_rows < 1:
        raise ValidationError(
            f"numOfRows는 1 이상이어야 합니다 (입력값: {num_of_rows})"
        )


def _check_date(name: str, value: Optional[str]) -> None:
    if value and not _DATE_PATTERN.match(value):
        raise ValidationError(
            f"{name}은(는) YYYYMMDD 형식이어야 합니다 (입력값: '{value}')"
        )


class YouthActivityApiClient:
    """
    Client for the Youth Activity Information API (data.go.kr).

    Every operation returns the same shape:
        {
            "totalCount": int,     # Total number of matching items
            "items": dict | list,  # One item, a list of items, or []
            "pageNo": int,         # Requested page number
            "numOfRows": int,      # Requested page size
        }

    ``items`` keeps the shape the XML produced: a single result comes back as
    a dict, several as a list. Callers handle both.
    """

    BASE_URL = "https://apis.data.go.kr/1383000/YouthActivInfoSrvc"

    # --- Constants for API Parameters ---
    DEFAULT_PAGE_NO = 1
    DEFAULT_REGION_ROWS = 100
    DEFAULT_SEARCH_ROWS = 10
    DEFAULT_TIMEOUT = 10.0
    SUCCESS_CODE = "00"
    # --- End Constants ---

    SIDO_LIST_ENDPOINT = "/getSidoList"
    SIGUNGU_LIST_ENDPOINT = "/getSigunguList"
    ACTIVITY_LIST_ENDPOINT = "/getJtvtsProgrmList"
    FACILITY_GROUP_LIST_ENDPOINT = "/getJltlsGrpList"

    def __init__(
        self,
        service_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: Optional[str] = None,
    ):
        """
        Initialize with the service key.

        Args:
            service_key: data.go.kr service key, used as issued (already URL-encoded).
            timeout: Per-call ceiling in seconds.
            base_url: Override for the API host, mainly for tests.
        """
        self.service_key = service_key
        self.timeout = timeout
        self.base_url = base_url or self.BASE_URL

    def _build_url(self, endpoint: str, params: Dict[str, Any]) -> str:
        # Drop unset filters so they are not sent as empty values
        query = {k: v for k, v in params.items() if v is not None and v != ""}
        encoded_params = urllib.parse.urlencode(query)
        url = f"{self.base_url}{endpoint}?serviceKey={self.service_key}"
        if encoded_params:
            url = f"{url}&{encoded_params}"
        return url

    async def _make_request(
        self, endpoint: str, params: Dict[str, Any], page_no: int, num_of_rows: int
    ) -> Dict[str, Any]:
        """Fetch one page from the API and unwrap the XML envelope."""
        full_url = self._build_url(
            endpoint, {"pageNo": page_no, "numOfRows": num_of_rows, **params}
        )
        logger.debug(f"GET {self.base_url}{endpoint} params={params}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(full_url)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"API 호출 실패: {self.timeout}초 안에 응답이 없습니다 ({e})",
                url=endpoint,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"API 호출 실패: {e}", url=endpoint) from e

        if response.status_code >= 400:
            raise TransportError(
                f"API 호출 실패: HTTP {response.status_code}",
                response=response.text or None,
                url=endpoint,
                status_code=response.status_code,
            )

        try:
            parsed = parse_xml(response.text)
        except ParseError:
            logger.error(f"Could not parse response from {endpoint}: {response.text!r}")
            raise

        envelope = parsed.get("response")
        if not isinstance(envelope, dict):
            raise UnexpectedFormatError(
                "예상치 못한 응답 형식: 'response' 요소가 없습니다",
                response=response.text,
                url=endpoint,
            )

        header = envelope.get("header")
        header = header if isinstance(header, dict) else {}
        body = envelope.get("body")
        body = body if isinstance(body, dict) else {}

        result_code = header.get("resultCode")
        if result_code != self.SUCCESS_CODE:
            raise UpstreamApiError(
                f"API 오류: {header.get('resultMsg') or '알 수 없는 오류'}",
                result_code=result_code,
                url=endpoint,
            )

        raw_total = body.get("totalCount") or "0"
        try:
            total_count = int(raw_total)
        except (TypeError, ValueError):
            raise UnexpectedFormatError(
                f"예상치 못한 응답 형식: totalCount 값이 '{raw_total}'입니다",
                url=endpoint,
            )

        items: Any = []
        items_container = body.get("items")
        if isinstance(items_container, dict) and items_container.get("item"):
            items = items_container["item"]

        return {
            "totalCount": max(total_count, 0),
            "items": items,
            "pageNo": page_no,
            "numOfRows": num_of_rows,
        }

    async def get_sido_list(
        self,
        page_no: int = DEFAULT_PAGE_NO,
        num_of_rows: int = DEFAULT_REGION_ROWS,
    ) -> Dict[str, Any]:
        """
        Get the list of sido (province-level regions).

        Items:
            {
                "ctpvNm": str,      # Sido name
                "ctpvCode": str     # Sido code
            }
        """
        _check_paging(page_no, num_of_rows)
        return await self._make_request(
            self.SIDO_LIST_ENDPOINT, {}, page_no, num_of_rows
        )

    async def get_sigungu_list(
        self,
        sido: str,
        page_no: int = DEFAULT_PAGE_NO,
        num_of_rows: int = DEFAULT_REGION_ROWS,
    ) -> Dict[str, Any]:
        """
        Get the sigungu (district-level regions) of one sido.

        Args:
            sido: Sido name, e.g. "서울" or "부산광역시" (required)
            page_no: Page number for pagination
            num_of_rows: Number of items per page
        """
        if not sido or not sido.strip():
            raise ValidationError("시군구 목록을 조회하려면 sido를 입력해야 합니다")
        _check_paging(page_no, num_of_rows)
        return await self._make_request(
            self.SIGUNGU_LIST_ENDPOINT, {"sido": sido.strip()}, page_no, num_of_rows
        )

    async def search_activities(
        self,
        at_name: Optional[str] = None,
        org_name: Optional[str] = None,
        sido: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        page_no: int = DEFAULT_PAGE_NO,
        num_of_rows: int = DEFAULT_SEARCH_ROWS,
    ) -> Dict[str, Any]:
        """
        Search youth activity programs.

        Args:
            at_name: Program name
            org_name: Organizing institution name
            sido: Sido name
            start_date: Activity period start (YYYYMMDD)
            end_date: Activity period end (YYYYMMDD)
            page_no: Page number for pagination
            num_of_rows: Number of items per page

        Items:
            {
                "actTitle": str,               # Program title
                "organNm": str,                # Institution name
                "actBeginDt": str,             # Start date
                "actEndDt": str,               # End date
                "actPlace": str,               # Venue
                "youthPolicyShortIntro": str,  # Short introduction
                "actTarget": str,              # Target audience
                "actPart": str                 # Activity field
            }
        """
        _check_paging(page_no, num_of_rows)
        _check_date("startDate", start_date)
        _check_date("endDate", end_date)

        params: Dict[str, Any] = {
            "atName": at_name,
            "orgName": org_name,
            "sido": sido,
            "startDate": start_date,
            "endDate": end_date,
        }
        return await self._make_request(
            self.ACTIVITY_LIST_ENDPOINT, params, page_no, num_of_rows
        )

    async def get_facility_group_list(
        self,
        sido: Optional[str] = None,
        st_name: Optional[str] = None,
        g_name: Optional[str] = None,
        page_no: int = DEFAULT_PAGE_NO,
        num_of_rows: int = DEFAULT_SEARCH_ROWS,
    ) -> Dict[str, Any]:
        """
        Get youth facility groups.

        Args:
            sido: Sido name
            st_name: Institution name
            g_name: Institution type name
            page_no: Page number for pagination
            num_of_rows: Number of items per page
        """
        _check_paging(page_no, num_of_rows)
        params: Dict[str, Any] = {
            "sido": sido,
            "stName": st_name,
            "gName": g_name,
        }
        return await self._make_request(
            self.FACILITY_GROUP_LIST_ENDPOINT, params, page_no, num_of_rows
        )


if __name__ == "__main__":
    import os
    import asyncio

    service_key = os.environ.get("YOUTH_API_SERVICE_KEY")
    if not service_key:
        raise ValueError("YOUTH_API_SERVICE_KEY environment variable is not set")
    client = YouthActivityApiClient(service_key=service_key)
    print(asyncio.run(client.get_sido_list()))
