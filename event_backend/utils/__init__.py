# -*- coding: utf-8 -*-
"""
Вспомогательные утилиты сервиса.
"""

from event_backend.utils.security import get_client_ip, mask_email, validate_email

__all__ = ["get_client_ip", "mask_email", "validate_email"]
