"""View mixins for common functionality"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response

from shipping.services.base import ServiceError

logger = logging.getLogger(__name__)


class ServiceErrorResponseMixin:
    """
    서비스 레이어 예외를 HTTP 응답으로 변환하는 Mixin

    에러 코드별 상태 코드:
    - NOT_FOUND: 404
    - INVALID_REFERENCE, VALIDATION_ERROR, COUNTY_HAS_AREAS: 400
    - DUPLICATE_KEY: 409
    """

    STATUS_BY_CODE = {
        "NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "INVALID_REFERENCE": status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
        "COUNTY_HAS_AREAS": status.HTTP_400_BAD_REQUEST,
        "DUPLICATE_KEY": status.HTTP_409_CONFLICT,
    }

    def service_error_response(self, error: ServiceError) -> Response:
        """
        서비스 예외를 구조화된 에러 응답으로 변환합니다.

        Args:
            error: 서비스 레이어에서 발생한 예외

        Returns:
            Response: {"error", "code", "details"} 형식의 에러 응답
        """
        response_status = self.STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)

        logger.info(
            "[API] 서비스 에러 응답 | view=%s, code=%s, status=%d",
            self.__class__.__name__,
            error.code,
            response_status,
        )

        return Response(
            {
                "error": error.message,
                "code": error.code,
                "details": error.details,
            },
            status=response_status,
        )
