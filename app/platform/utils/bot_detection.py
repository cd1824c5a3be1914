from fastapi import Request

BOT_USER_AGENTS = (
    "bot",
    "crawler",
    "spider",
    "slurp",
    "baidu",
    "yandex",
    "bingbot",
    "googlebot",
    "duckduckbot",
    "curl",
    "wget",
    "python",
    "node",
    "axios",
    "postman",
    "selenium",
    "puppeteer",
    "playwright",
    "phantomjs",
    "headless",
)


def is_bot_user_agent(user_agent: str) -> bool:
    user_agent = (user_agent or "").lower()
    return any(marker in user_agent for marker in BOT_USER_AGENTS)


def detect_bot(request: Request) -> bool:
    """
    Flag a request as automated when its user agent matches the blocklist
    or it carries none of the headers every browser sends.
    """
    if is_bot_user_agent(request.headers.get("user-agent", "")):
        return True

    browser_headers = ("accept", "accept-language", "accept-encoding")
    return not any(request.headers.get(header) for header in browser_headers)
