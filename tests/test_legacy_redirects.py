"""End-to-end redirects for the legacy springsource.org hosts.

Runs every request through the full ASGI pipeline with the mappings
rules consulted before the site rules.
"""

from rerouter.app import App
from rerouter.testing import (
    TestClient,
    assert_passthrough,
    assert_permanent_redirect,
    assert_temporary_redirect,
)


class TestLegacySite:
    async def test_legacy_site_redirects(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_permanent_redirect(
                await client.get("http://www.springsource.org/sts/welcome"),
                "http://springframework.io/tools/sts/welcome",
            )
            assert_permanent_redirect(
                await client.get("http://www.springsource.org/groovy-grails-tool-suite-download"),
                "http://springframework.io/tools/ggts",
            )
            assert_temporary_redirect(
                await client.get("http://www.springsource.org/ggts/welcome"),
                "http://grails.org/products/ggts",
            )

    async def test_old_case_studies(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            response = await client.get("http://www.springsource.org/files/uploads/file.pdf")
            assert_temporary_redirect(
                response, "http://drupal.springframework.io/files/uploads/file.pdf"
            )

    async def test_videos_redirect_to_youtube(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            for url in ("http://www.springsource.org/videos", "http://www.example.com/videos"):
                assert_temporary_redirect(
                    await client.get(url), "http://www.youtube.com/springsourcedev"
                )

    async def test_strips_www_subdomain(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            for url in ("http://www.springsource.org/something", "http://www.example.com/something"):
                assert_permanent_redirect(await client.get(url), "http://springframework.io/something")


class TestBlog:
    async def test_pages(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            response = await client.get("http://blog.springsource.org/anything")
            assert_permanent_redirect(response, "http://springframework.io/blog/anything")

    async def test_assets(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            response = await client.get(
                "http://blog.springsource.org/wp-content/uploads/attachment.zip"
            )
            assert_temporary_redirect(
                response, "http://wp.springframework.io/wp-content/uploads/attachment.zip"
            )

    async def test_authors(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            response = await client.get("http://blog.springsource.org/author/cbeams")
            assert_permanent_redirect(response, "http://springframework.io/team/cbeams")

    async def test_drupal_nodes(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            response = await client.get(
                "http://blog.springsource.org/BusinessIntelligenceWithSpringAndBIRT"
            )
            assert_permanent_redirect(
                response, "http://springframework.io/blog/2012/01/30/spring-framework-birt"
            )


class TestGuides:
    async def test_guides_always_have_trailing_slash(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_permanent_redirect(
                await client.get("/guides/gs/guide-name"), "/guides/gs/guide-name/"
            )

    async def test_guide_with_trailing_slash_is_served(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_passthrough(await client.get("/guides/gs/guide-name/"))

    async def test_gs_listing_redirects_to_index(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_temporary_redirect(await client.get("/guides/gs/"), "/guides#gs")
            assert_temporary_redirect(await client.get("/guides/gs"), "/guides#gs")

    async def test_tutorials_listing_redirects_to_index(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_temporary_redirect(await client.get("/guides/tutorials/"), "/guides#tutorials")
            assert_temporary_redirect(await client.get("/guides/tutorials"), "/guides#tutorials")


class TestProjects:
    async def test_index_is_not_redirected(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_passthrough(await client.get("http://springframework.io/projects"))

    async def test_index_with_slash_is_not_redirected(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_passthrough(await client.get("http://springframework.io/projects/"))

    async def test_project_pages_are_redirected(self, legacy_app: App) -> None:
        async with TestClient(legacy_app) as client:
            assert_temporary_redirect(
                await client.get("http://springframework.io/projects/spring-data"),
                "http://projects.springframework.io/spring-data",
            )
            assert_temporary_redirect(
                await client.get("http://springframework.io/projects/not-exist"),
                "http://projects.springframework.io/not-exist",
            )


class TestPrecedence:
    """The mappings rules are consulted before the site rules."""

    def test_chain_order_follows_rule_files(self, legacy_app: App) -> None:
        assert [engine.name for engine in legacy_app.chain] == ["mappings", "site"]

