import httpx
import pytest

from dog_breeds.errors import (
    DecodeFailure,
    EmptyResponseBody,
    ImageLoadFailure,
    InvalidRequestURL,
    TransportFailure,
)
from dog_breeds.fetchers import fetch_breed_image, fetch_breed_names

from conftest import json_handler

@pytest.mark.asyncio
async def test_breed_names_are_sorted_keys(dog_api):
    payload = {"message": {"beagle": ["tibetan"], "akita": []}, "status": "success"}
    async with dog_api(json_handler(payload)) as api:
        assert await fetch_breed_names(api) == ["akita", "beagle"]

@pytest.mark.asyncio
async def test_breed_names_sort_on_raw_string(dog_api):
    payload = {"message": {"pug": [], "Boxer": [], "akita": [], "bulldog": ["french", "english"]}}
    async with dog_api(json_handler(payload)) as api:
        assert await fetch_breed_names(api) == ["Boxer", "akita", "bulldog", "pug"]

@pytest.mark.asyncio
async def test_empty_message_gives_empty_list(dog_api):
    async with dog_api(json_handler({"message": {}, "status": "success"})) as api:
        assert await fetch_breed_names(api) == []

@pytest.mark.asyncio
async def test_breed_list_hits_list_endpoint(dog_api):
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"message": {}})

    async with dog_api(handler) as api:
        await fetch_breed_names(api)
    assert paths == ["/api/breeds/list/all"]

@pytest.mark.asyncio
async def test_non_2xx_is_transport_failure_not_empty_list(dog_api):
    async with dog_api(json_handler({"status": "error", "message": "nope"}, status=404)) as api:
        with pytest.raises(TransportFailure) as exc:
            await fetch_breed_names(api)
    assert "404" in exc.value.message
    assert exc.value.user_message.startswith("Error: ")

@pytest.mark.asyncio
async def test_network_error_is_transport_failure(dog_api):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    async with dog_api(handler) as api:
        with pytest.raises(TransportFailure) as exc:
            await fetch_breed_names(api)
    assert exc.value.message == "Name or service not known"
    assert isinstance(exc.value.__cause__, httpx.ConnectError)

@pytest.mark.asyncio
async def test_empty_body_is_reported_as_no_data(dog_api):
    async with dog_api(lambda request: httpx.Response(200, content=b"")) as api:
        with pytest.raises(EmptyResponseBody) as exc:
            await fetch_breed_names(api)
    assert exc.value.user_message == "No data received."

@pytest.mark.asyncio
async def test_missing_message_key_is_decode_failure(dog_api):
    async with dog_api(json_handler({"status": "success"})) as api:
        with pytest.raises(DecodeFailure):
            await fetch_breed_names(api)

@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    b"<html>oops</html>",
    b"[1, 2, 3]",
    b'{"message": ["akita"]}',
    b'{"message": {"akita": "none"}}',
])
async def test_wrong_shape_is_decode_failure_without_parser_text(dog_api, body):
    async with dog_api(lambda request: httpx.Response(200, content=body)) as api:
        with pytest.raises(DecodeFailure) as exc:
            await fetch_breed_names(api)
    assert exc.value.user_message == "Failed to decode data."

@pytest.mark.asyncio
async def test_invalid_base_url(dog_api):
    async with dog_api(json_handler({"message": {}}), base_url="ftp://dog.example/api") as api:
        with pytest.raises(InvalidRequestURL):
            await fetch_breed_names(api)

@pytest.mark.asyncio
async def test_image_url_returned_unmodified(dog_api):
    url = "https://images.dog.ceo/x.jpg"
    async with dog_api(json_handler({"message": url, "status": "success"})) as api:
        assert await fetch_breed_image(api, "akita") == url

@pytest.mark.asyncio
@pytest.mark.parametrize("breed, raw_path", [
    ("akita", b"/api/breed/akita/images/random"),
    ("german shepherd", b"/api/breed/german%20shepherd/images/random"),
    ("bull/dog", b"/api/breed/bull%2Fdog/images/random"),
    ("what?#", b"/api/breed/what%3F%23/images/random"),
])
async def test_breed_is_percent_encoded_as_one_segment(dog_api, breed, raw_path):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path)
        return httpx.Response(200, json={"message": "https://images.dog.ceo/x.jpg"})

    async with dog_api(handler) as api:
        await fetch_breed_image(api, breed)
    assert seen == [raw_path]

@pytest.mark.asyncio
async def test_rejected_breed_collapses_to_image_failure(dog_api):
    handler = json_handler({"status": "error", "message": "Breed not found (main breed does not exist)"}, status=404)
    async with dog_api(handler) as api:
        with pytest.raises(ImageLoadFailure) as exc:
            await fetch_breed_image(api, "german shepherd")
    assert exc.value.user_message == "Failed to load image."
    assert isinstance(exc.value.reason, TransportFailure)

@pytest.mark.asyncio
async def test_rejected_breed_with_detailed_errors(dog_api):
    async with dog_api(json_handler({"status": "error"}, status=404)) as api:
        with pytest.raises(TransportFailure):
            await fetch_breed_image(api, "german shepherd", detailed_errors=True)

@pytest.mark.asyncio
@pytest.mark.parametrize("response, reason", [
    (httpx.Response(200, content=b""), EmptyResponseBody),
    (httpx.Response(200, json={"status": "success"}), DecodeFailure),
    (httpx.Response(200, json={"message": 42}), DecodeFailure),
    (httpx.Response(500, json={"status": "error"}), TransportFailure),
])
async def test_image_failures_all_collapse(dog_api, response, reason):
    async with dog_api(lambda request: response) as api:
        with pytest.raises(ImageLoadFailure) as exc:
            await fetch_breed_image(api, "akita")
    assert isinstance(exc.value.reason, reason)

@pytest.mark.asyncio
async def test_empty_breed_name_is_invalid_url(dog_api):
    async with dog_api(json_handler({"message": "x"})) as api:
        with pytest.raises(InvalidRequestURL):
            await fetch_breed_image(api, "", detailed_errors=True)

@pytest.mark.asyncio
async def test_undecodable_breed_name_collapses_to_image_failure(dog_api):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"message": "https://images.dog.ceo/x.jpg"})

    async with dog_api(handler) as api:
        with pytest.raises(ImageLoadFailure) as exc:
            await fetch_breed_image(api, "\udcff")
        with pytest.raises(InvalidRequestURL):
            await fetch_breed_image(api, "\udcff", detailed_errors=True)
    assert isinstance(exc.value.reason, InvalidRequestURL)
    assert calls == []
