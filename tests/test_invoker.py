import os

import httpx
import openai
import pytest

from classifier.errors import InvocationError, InvocationTimeout
from classifier.invoker import ModelInvoker, build_messages
from classifier.models import Attachment, Modality, ModelRequest
from common.config import Settings


def create_mock_response(mocker, content):
    mock_choice = mocker.MagicMock()
    mock_choice.message.content = content
    mock_response = mocker.MagicMock()
    mock_response.choices = [mock_choice]
    return mock_response


def _request() -> httpx.Request:
    return httpx.Request("POST", "https://example.com/v1/chat/completions")


@pytest.fixture
def settings(mocker):
    mocker.patch.dict(
        os.environ,
        {
            "OPENAI_API_KEY": "test_api_key",
            "CLASSIFY_MODEL": "classify-model",
        },
        clear=True,
    )
    return Settings()


@pytest.fixture
def client(mocker):
    return mocker.MagicMock()


@pytest.fixture
def invoker(settings, client):
    return ModelInvoker(settings, client)


def test_build_messages_text_is_single_prompt_message():
    request = ModelRequest(modality=Modality.TEXT, prompt="classify this")

    assert build_messages(request) == [{"role": "user", "content": "classify this"}]


def test_build_messages_image_puts_images_before_prompt():
    request = ModelRequest(
        modality=Modality.IMAGE,
        prompt="look at this",
        attachments=(
            Attachment.from_bytes(b"\x89PNG", "image/png"),
            Attachment.from_bytes(b"\xff\xd8\xff", "image/jpeg"),
        ),
    )

    (message,) = build_messages(request)

    assert message["role"] == "user"
    first, second, prompt = message["content"]
    assert first == {
        "type": "image_url",
        "image_url": {"url": "data:image/png;base64,iVBORw=="},
    }
    assert second["image_url"]["url"] == "data:image/jpeg;base64,/9j/"
    assert prompt == {"type": "text", "text": "look at this"}


def test_build_messages_pdf_sends_file_part():
    request = ModelRequest(
        modality=Modality.PDF,
        prompt="look at this",
        attachments=(Attachment.from_bytes(b"%PDF-1.4", "application/pdf"),),
    )

    (message,) = build_messages(request)

    file_part, prompt = message["content"]
    assert file_part["type"] == "file"
    assert file_part["file"]["file_data"] == "data:application/pdf;base64,JVBERi0xLjQ="
    assert file_part["file"]["filename"].endswith(".pdf")
    assert prompt == {"type": "text", "text": "look at this"}


def test_build_messages_visual_request_requires_attachment():
    request = ModelRequest(modality=Modality.PDF, prompt="look at this")

    with pytest.raises(ValueError):
        build_messages(request)


def test_invoke_sends_fixed_model_parameters(invoker, client, mocker):
    client.chat.completions.create.return_value = create_mock_response(mocker, "reply")

    reply = invoker.invoke(ModelRequest(modality=Modality.TEXT, prompt="hi"))

    assert reply == "reply"
    client.chat.completions.create.assert_called_once()
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "classify-model"
    assert kwargs["max_tokens"] == 128
    assert kwargs["timeout"] == 6.0
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]


def test_invoke_returns_empty_string_without_text(invoker, client, mocker):
    client.chat.completions.create.return_value = create_mock_response(mocker, None)

    assert invoker.invoke(ModelRequest(modality=Modality.TEXT, prompt="hi")) == ""


def test_invoke_returns_empty_string_without_choices(invoker, client, mocker):
    response = mocker.MagicMock()
    response.choices = []
    client.chat.completions.create.return_value = response

    assert invoker.invoke(ModelRequest(modality=Modality.TEXT, prompt="hi")) == ""


def test_invoke_translates_timeout(invoker, client):
    client.chat.completions.create.side_effect = openai.APITimeoutError(
        request=_request()
    )

    with pytest.raises(InvocationTimeout) as excinfo:
        invoker.invoke(ModelRequest(modality=Modality.TEXT, prompt="hi"))

    assert "6000 ms" in excinfo.value.message
    assert client.chat.completions.create.call_count == 1


def test_invoke_translates_connection_error(invoker, client):
    client.chat.completions.create.side_effect = openai.APIConnectionError(
        request=_request()
    )

    with pytest.raises(InvocationError) as excinfo:
        invoker.invoke(ModelRequest(modality=Modality.TEXT, prompt="hi"))

    assert not isinstance(excinfo.value, InvocationTimeout)
    assert client.chat.completions.create.call_count == 1


def test_invoke_translates_api_status_error(invoker, client):
    response = httpx.Response(400, request=_request())
    client.chat.completions.create.side_effect = openai.BadRequestError(
        "file parts not supported", response=response, body=None
    )

    with pytest.raises(InvocationError, match="file parts not supported"):
        invoker.invoke(ModelRequest(modality=Modality.TEXT, prompt="hi"))


def test_invoke_honours_configured_timeout(mocker, client):
    mocker.patch.dict(
        os.environ,
        {"OPENAI_API_KEY": "test_api_key", "REQUEST_TIMEOUT_MS": "2500"},
        clear=True,
    )
    client.chat.completions.create.return_value = create_mock_response(mocker, "ok")

    ModelInvoker(Settings(), client).invoke(
        ModelRequest(modality=Modality.TEXT, prompt="hi")
    )

    assert client.chat.completions.create.call_args.kwargs["timeout"] == 2.5
