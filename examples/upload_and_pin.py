"""
Example: upload a small site as a directory DAG, pin an existing CID
and check its status.

Reads PINARKIVE_API_KEY (and optionally PINARKIVE_BASE_URL) from the
environment or a .env file. HTTP traffic is written to logs/http.log.
"""

import asyncio
import tempfile
from logging import basicConfig
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from pinarkive import FileContent
from pinarkive import LocalFile
from pinarkive import PinarkiveClient

load_dotenv()

console = Console()


async def main() -> None:
    console.print(Panel.fit("[bold blue]Pinarkive upload example[/bold blue]"))

    with tempfile.TemporaryDirectory() as tmpdir:
        logo = Path(tmpdir) / "logo.txt"
        logo.write_text("pinarkive")
        await upload_site(logo)


async def upload_site(logo: Path) -> None:
    async with PinarkiveClient.from_env(log_file=Path("logs") / "http.log") as client:
        resp = await client.upload_directory_dag(
            [
                FileContent(path="index.html", content="<h1>Hello from Pinarkive</h1>"),
                FileContent(path="about.html", content="<p>About</p>"),
                LocalFile(logo),
            ],
            dir_name="site",
        )
        console.print(f"[green]DAG upload:[/green] {resp.status} {await resp.json()}")

        resp = await client.pin_cid("QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG", "readme")
        console.print(f"[green]Pin:[/green] {resp.status} {await resp.json()}")

        resp = await client.get_status("QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG")
        console.print(f"[blue]Status:[/blue] {await resp.json()}")

        resp = await client.list_uploads(page=1, limit=5)
        console.print(f"[blue]Recent uploads:[/blue] {await resp.json()}")


if __name__ == "__main__":
    basicConfig(
        level="INFO",
        format="[%(name)s] %(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    asyncio.run(main())
