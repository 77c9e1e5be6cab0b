# 배송 지역 관리 권한 관련 커스텀 권한 클래스를 정의합니다.

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class IsShippingManager(permissions.BasePermission):
    """
    배송 지역 관리자 권한 체크

    - 인증된 staff 사용자이면서
    - superuser이거나 shipping.change_county 권한을 가진 경우에만 허용
    - County/Area 관리, 배송 통계 조회, 관리자용 배송비 계산에 사용

    사용 예시:
        permission_classes = [IsShippingManager]
    """

    message = "배송 지역 관리 권한이 필요합니다."

    MANAGE_PERMISSION = "shipping.change_county"

    def has_permission(self, request: Request, view: APIView) -> bool:
        """
        요청 레벨 권한 체크

        Args:
            request: HTTP 요청 객체
            view: 뷰 객체

        Returns:
            bool: 권한 여부
        """
        user = request.user

        # 인증된 staff 사용자인지 확인
        if not user or not user.is_authenticated or not user.is_staff:
            return False

        return user.is_superuser or user.has_perm(self.MANAGE_PERMISSION)
