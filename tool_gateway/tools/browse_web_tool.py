# The module defines the browse_web tool, which extracts the readable text of a web page
# with a headless Chromium instance driven by Playwright.
# Date: 2025-07-02
# Version: 0.1.0

from typing import Dict, Type

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright
from pydantic import BaseModel, Field

from .base_tool import BaseTool
from tool_gateway.core.config import get_settings
from tool_gateway.core.errors import HandlerError
from tool_gateway.utils.logger import console

# Runs in the page: drops non-content elements and returns the visible body text.
EXTRACT_TEXT_SCRIPT = """() => {
    document
        .querySelectorAll('script, style, nav, footer, iframe, noscript')
        .forEach((el) => el.remove());
    return document.body ? document.body.innerText : '';
}"""


class BrowseWebInput(BaseModel):
    """Input model for the browse_web tool."""
    url: str = Field(..., description="The absolute URL of the page to read, including the scheme.")


class BrowseWebTool(BaseTool):
    """
    Opens a page in a headless browser and returns its title and visible text.

    Every call launches its own browser process and closes it before returning,
    whether the call succeeds or fails. The text is cut at a fixed number of
    characters.
    """
    name: str = "browse_web"
    description: str = "Opens a web page in a headless browser and returns its title and visible text content."
    args_schema: Type[BaseModel] = BrowseWebInput

    def __init__(self):
        super().__init__()
        settings = get_settings()
        self.timeout_ms = settings.BROWSE_TIMEOUT * 1000
        self.max_chars = settings.BROWSE_MAX_CHARS

    async def execute(self, url: str) -> Dict[str, str]:
        console.info(f"Executing tool '{self.name}' for URL: '{url}'")
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True)
                try:
                    page = await browser.new_page()
                    await page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
                    title = await page.title()
                    text = await page.evaluate(EXTRACT_TEXT_SCRIPT)
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise HandlerError(e.message) from e

        content = (text or "")[:self.max_chars]
        console.success(f"Tool '{self.name}' extracted {len(content)} characters from '{url}'.")
        return {"title": title, "content": content}
