"""Decoder for the JSON document served by an eldood poll."""
import json
import logging
from typing import Any, Dict, List

from processor.errors import BadStatus, MalformedResponse
from processor.models import Attendance, Participant, PollResult

logger = logging.getLogger(__name__)


class PollDecoder:
    """Validate a poll document and project it into a PollResult."""

    STATUS_OK = 'ok'

    def decode(self, body: str) -> PollResult:
        """
        Decode a response body into a PollResult.

        The status field is checked before anything else, so a document
        reporting an error is rejected as BadStatus even when the other
        fields are missing.

        Args:
            body: Raw response body

        Returns:
            PollResult built from the document

        Raises:
            MalformedResponse: If the body is not JSON or a field is missing
                or has the wrong type
            BadStatus: If the status field is not "ok"
        """
        try:
            document = json.loads(body)
        except ValueError as e:
            raise MalformedResponse(str(e)) from e

        if not isinstance(document, dict):
            raise MalformedResponse(
                f"expected a JSON object, got {_type_name(document)}"
            )

        status = self._require_str(document, 'status', 'status')
        if status != self.STATUS_OK:
            logger.info(f"Poll service returned status {status!r}")
            raise BadStatus(status)

        name = self._require_str(document, 'name', 'name')
        description = self._require_str(document, 'descr', 'descr')
        dates = self._require_str_list(document, 'dates', 'dates')

        raw_responses = self._require(document, 'responses', 'responses', list)
        responses = [
            self._decode_participant(raw, f"responses[{index}]")
            for index, raw in enumerate(raw_responses)
        ]

        logger.info(
            f"Decoded poll '{name}' with {len(dates)} dates and "
            f"{len(responses)} responses"
        )
        return PollResult(
            name=name,
            description=description,
            dates=tuple(dates),
            responses=tuple(responses)
        )

    def _decode_participant(self, raw: Any, path: str) -> Participant:
        """
        Build a Participant from one entry of the responses list.

        If-need-be dates are applied first and OK dates second, so a date
        listed in both resolves to OK.
        """
        if not isinstance(raw, dict):
            raise MalformedResponse(
                f"{path}: expected an object, got {_type_name(raw)}",
                field=path
            )

        name = self._require_str(raw, 'name', f"{path}.name")
        ok_dates = self._require_str_list(raw, 'ok_dates', f"{path}.ok_dates")
        ifneedbe_dates = self._require_str_list(
            raw, 'ifneedbe_dates', f"{path}.ifneedbe_dates"
        )

        availability = {}
        for date in ifneedbe_dates:
            availability[date] = Attendance.IF_NEED_BE
        for date in ok_dates:
            availability[date] = Attendance.OK

        return Participant(name=name, availability=availability)

    def _require(self, obj: Dict[str, Any], key: str, path: str, expected: type) -> Any:
        if key not in obj:
            raise MalformedResponse(f"missing field '{path}'", field=path)
        value = obj[key]
        if not isinstance(value, expected):
            raise MalformedResponse(
                f"field '{path}': expected {expected.__name__}, "
                f"got {_type_name(value)}",
                field=path
            )
        return value

    def _require_str(self, obj: Dict[str, Any], key: str, path: str) -> str:
        return self._require(obj, key, path, str)

    def _require_str_list(self, obj: Dict[str, Any], key: str, path: str) -> List[str]:
        values = self._require(obj, key, path, list)
        for index, value in enumerate(values):
            if not isinstance(value, str):
                item_path = f"{path}[{index}]"
                raise MalformedResponse(
                    f"field '{item_path}': expected str, got {_type_name(value)}",
                    field=item_path
                )
        return values


def _type_name(value: Any) -> str:
    # JSON names rather than Python ones
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'bool'
    return type(value).__name__
