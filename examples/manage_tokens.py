"""
Example demonstrating API token management.

Generates a short-lived token limited to one address, lists all tokens
and revokes the new one again.
"""

import asyncio
import os
from logging import basicConfig
from logging import getLogger

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from pinarkive import PinarkiveClient
from pinarkive import TokenOptions

load_dotenv()

logger = getLogger(__name__)
console = Console()


async def main() -> None:
    api_key = os.getenv("PINARKIVE_API_KEY", "")
    if not api_key:
        logger.warning("PINARKIVE_API_KEY is not set, requests will be anonymous")

    async with PinarkiveClient(api_key=api_key or None) as client:
        options = TokenOptions(
            permissions=["files:read", "files:write"],
            expires_in_days=7,
            ip_allowlist=["203.0.113.10"],
        )
        resp = await client.generate_token("example-ci", options)
        created = Text()
        created.append("Generated: ", style="bold green")
        created.append(str(await resp.json()), style="white")
        created.append(f" ({resp.status})", style="dim")
        console.print(created)

        resp = await client.list_tokens()
        console.print(f"[blue]Tokens:[/blue] {await resp.json()}")

        resp = await client.revoke_token("example-ci")
        if resp.status >= 400:
            console.print(f"[red]Revoke failed:[/red] {resp.status} {await resp.text()}")
        else:
            console.print("[green]Revoked example-ci[/green]")


if __name__ == "__main__":
    basicConfig(
        level="INFO",
        format="[%(name)s] %(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    asyncio.run(main())
