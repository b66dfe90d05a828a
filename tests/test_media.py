"""Unit tests for blog_api.services.media: request signing and the Cloudinary REST calls."""

import asyncio
import hashlib
import unittest
from urllib.parse import parse_qs

import httpx

from blog_api.core.config import get_settings
from blog_api.services.media import (
    MediaHostError,
    delete_image,
    public_id_from_url,
    sign_params,
    upload_image,
)

IMAGE_URL = "https://res.cloudinary.com/demo-cloud/image/upload/v1700000000/blog-api/abc123.jpg"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestSignParams(unittest.TestCase):
    def test_sorted_and_secret_appended(self) -> None:
        signature = sign_params({"timestamp": 1315060510, "public_id": "sample"}, "abcd")
        expected = hashlib.sha1(b"public_id=sample&timestamp=1315060510abcd").hexdigest()
        self.assertEqual(signature, expected)

    def test_empty_values_skipped(self) -> None:
        self.assertEqual(
            sign_params({"a": "1", "b": "", "c": None}, "s"),
            hashlib.sha1(b"a=1s").hexdigest(),
        )


class TestPublicIdFromUrl(unittest.TestCase):
    def test_folder_and_name(self) -> None:
        self.assertEqual(public_id_from_url(IMAGE_URL), "blog-api/abc123")

    def test_unusable(self) -> None:
        self.assertIsNone(public_id_from_url(""))
        self.assertIsNone(public_id_from_url("https://example.com/"))


class TestUploadImage(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = get_settings()

    def test_returns_secure_url_and_signs_request(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = request.read()
            return httpx.Response(200, json={"secure_url": IMAGE_URL})

        async def run() -> str:
            async with _client(handler) as client:
                return await upload_image(b"\x89PNG", "a.png", "image/png", self.settings, client)

        self.assertEqual(asyncio.run(run()), IMAGE_URL)
        self.assertEqual(
            seen["url"], "https://api.cloudinary.com/v1_1/demo-cloud/image/upload"
        )
        self.assertIn(b'name="signature"', seen["body"])
        self.assertIn(b'name="api_key"', seen["body"])
        self.assertIn(b"c_fill,g_auto,h_1000,w_800", seen["body"])

    def test_host_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": {"message": "Invalid Signature"}})

        async def run() -> str:
            async with _client(handler) as client:
                return await upload_image(b"x", "a.png", "image/png", self.settings, client)

        with self.assertRaises(MediaHostError) as ctx:
            asyncio.run(run())
        self.assertEqual(ctx.exception.message, "Invalid Signature")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_network_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async def run() -> str:
            async with _client(handler) as client:
                return await upload_image(b"x", "a.png", "image/png", self.settings, client)

        with self.assertRaises(MediaHostError):
            asyncio.run(run())


class TestDeleteImage(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = get_settings()

    def test_destroys_by_public_id(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["form"] = parse_qs(request.read().decode())
            return httpx.Response(200, json={"result": "ok"})

        async def run() -> bool:
            async with _client(handler) as client:
                return await delete_image(IMAGE_URL, self.settings, client)

        self.assertTrue(asyncio.run(run()))
        self.assertTrue(seen["url"].endswith("/demo-cloud/image/destroy"))
        self.assertEqual(seen["form"]["public_id"], ["blog-api/abc123"])
        self.assertEqual(seen["form"]["api_key"], ["123456"])

    def test_not_found_result_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"result": "not found"})

        async def run() -> bool:
            async with _client(handler) as client:
                return await delete_image(IMAGE_URL, self.settings, client)

        with self.assertRaises(MediaHostError):
            asyncio.run(run())

    def test_unusable_url_raises_without_request(self) -> None:
        with self.assertRaises(MediaHostError):
            asyncio.run(delete_image("", self.settings))
