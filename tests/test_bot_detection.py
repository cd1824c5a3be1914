import pytest
from starlette.requests import Request

from app.platform.utils.bot_detection import detect_bot, is_bot_user_agent

BROWSER_HEADERS = {
    "user-agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15 Safari/605.1.15",
    "accept": "text/html,application/json",
    "accept-language": "en-US,en;q=0.9",
    "accept-encoding": "gzip, deflate, br",
}


def _request(headers):
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/api/verify",
            "headers": [(k.encode(), v.encode()) for k, v in headers.items()],
        }
    )


@pytest.mark.parametrize(
    "user_agent",
    ["Googlebot/2.1", "curl/8.4.0", "python-requests/2.31", "HeadlessChrome/120.0", "PostmanRuntime/7.36"],
)
def test_known_automation_user_agents(user_agent):
    assert is_bot_user_agent(user_agent)


def test_browser_user_agent_is_not_a_bot():
    assert not is_bot_user_agent(BROWSER_HEADERS["user-agent"])
    assert not detect_bot(_request(BROWSER_HEADERS))


def test_request_without_browser_headers_is_a_bot():
    assert detect_bot(_request({"user-agent": BROWSER_HEADERS["user-agent"]}))


def test_blocked_user_agent_wins_over_browser_headers():
    assert detect_bot(_request({**BROWSER_HEADERS, "user-agent": "Scrapy spider"}))


def test_unprotected_paths_allow_bots(client):
    response = client.get("/api/health", headers={"User-Agent": "curl/8.4.0"})
    assert response.status_code == 200
