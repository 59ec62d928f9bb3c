"""Pagination classes for API endpoints."""

from rest_framework.pagination import PageNumberPagination


class SocialPageNumberPagination(PageNumberPagination):
    """Page-number pagination for notification and follow lists."""

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
