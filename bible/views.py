from core.views import ApiView
from . import services


class VersionsView(ApiView):

    def get(self, request):
        return services.get_versions()


class BooksView(ApiView):

    def get(self, request):
        return services.get_books()


class ChapterView(ApiView):

    def get(self, request, version, abbrev, chapter):
        return services.get_chapter(version, abbrev, chapter)


class CompareView(ApiView):
    """As três versões (nvi, ra, acf) lado a lado."""

    def get(self, request, abbrev, chapter):
        return services.compare_chapter(abbrev, chapter)


class SearchView(ApiView):

    def get(self, request):
        return services.search(request.GET.get('version'), request.GET.get('text'))
