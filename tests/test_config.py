import asyncio
import unittest
from unittest import mock

import httpx

from glide_client.client import GlideClient
from glide_client.config import DEFAULT_BASE_URL, ClientConfig, Settings, parse_base_url
from glide_client.errors import ConfigError


class BaseUrlTests(unittest.TestCase):
    def test_invalid_base_url_fails_at_construction(self) -> None:
        for base in ("not a url", "ftp://host/", "/relative/path", "http://"):
            with self.subTest(base=base):
                with self.assertRaises(ConfigError):
                    GlideClient(base_url=base, http_client=httpx.AsyncClient())

    def test_config_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_base_url("mailto:someone@example.com")

    def test_trailing_slash_is_added(self) -> None:
        self.assertEqual(str(parse_base_url("http://host/v1")), "http://host/v1/")
        self.assertEqual(str(parse_base_url("http://host/v1/")), "http://host/v1/")


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertIsNone(settings.api_key)
        self.assertEqual(settings.base_url, DEFAULT_BASE_URL)
        self.assertTrue(settings.user_agent.startswith("glide-client/"))

    def test_env_prefix(self) -> None:
        env = {
            "GLIDE_API_KEY": "from-env",
            "GLIDE_BASE_URL": "http://self-hosted:9099/",
            "GLIDE_USER_AGENT": "my-app/1.0",
        }
        with mock.patch.dict("os.environ", env):
            settings = Settings(_env_file=None)
        config = ClientConfig.create(settings=settings, http_client=httpx.AsyncClient())
        self.assertEqual(config.api_key, "from-env")
        self.assertEqual(str(config.base_url), "http://self-hosted:9099/")
        self.assertEqual(config.user_agent, "my-app/1.0")

    def test_keyword_arguments_override_settings(self) -> None:
        settings = Settings(_env_file=None, api_key="env-key", base_url="http://env/")
        config = ClientConfig.create(
            api_key="kw-key",
            base_url="http://kw/",
            settings=settings,
            http_client=httpx.AsyncClient(),
        )
        self.assertEqual(config.api_key, "kw-key")
        self.assertEqual(config.base_url.host, "kw")

    def test_repr_masks_key(self) -> None:
        settings = Settings(_env_file=None, api_key="super-secret")
        config = ClientConfig.create(settings=settings, http_client=httpx.AsyncClient())
        self.assertNotIn("super-secret", repr(config))
        self.assertIn("*********", repr(config))


class OwnershipTests(unittest.TestCase):
    def test_injected_http_client_is_left_open(self) -> None:
        http_client = httpx.AsyncClient()
        client = GlideClient(base_url="http://host/", http_client=http_client)
        asyncio.run(client.aclose())
        self.assertFalse(http_client.is_closed)

    def test_created_http_client_is_closed(self) -> None:
        async def _run() -> GlideClient:
            async with GlideClient(base_url="http://host/", api_key="k") as client:
                pass
            return client

        client = asyncio.run(_run())
        self.assertTrue(client.config.http_client.is_closed)


if __name__ == "__main__":
    unittest.main()
