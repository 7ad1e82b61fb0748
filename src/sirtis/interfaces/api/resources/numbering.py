"""Numbering preview API resource."""

import falcon.asgi

from sirtis.application.use_cases.numbering.preview_numbers import PreviewNextNumbersUseCase
from sirtis.interfaces.api.context import require_subject


class NumberingPreviewResource:
    """GET /v1/call-centre/numbering/next?year=YYYY - next case and call numbers."""

    def __init__(self, preview_numbers: PreviewNextNumbersUseCase) -> None:
        self._preview = preview_numbers

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Predict next numbers. Values are not reserved."""
        subject = require_subject(req)
        year = req.get_param_as_int("year", min_value=1000, max_value=9999)
        preview = await self._preview.execute(subject, year)
        resp.media = {
            "year": preview.year,
            "next_case_number": preview.next_case_number,
            "next_call_number": preview.next_call_number,
        }
        resp.status = falcon.HTTP_200
