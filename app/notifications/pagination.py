"""
Pagination for the notification inbox.

Page-number pagination (?page, ?page_size) so mobile clients can jump to
an absolute page after a pull-to-refresh. Older app builds send ?per_page,
which is still honoured when ?page_size is absent.
"""

from rest_framework.pagination import PageNumberPagination


class NotificationPagination(PageNumberPagination):
    """
    Default: 20 notifications per page
    Maximum: 100 notifications per page
    """

    page_size = 20
    max_page_size = 100
    page_size_query_param = "page_size"
    legacy_page_size_query_param = "per_page"

    def get_page_size(self, request):
        if (
            self.page_size_query_param not in request.query_params
            and self.legacy_page_size_query_param in request.query_params
        ):
            self.page_size_query_param = self.legacy_page_size_query_param
        return super().get_page_size(request)
