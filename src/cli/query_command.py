"""Query commands for the CLI.

This module provides the QueryCommand class that runs read-only queries
against a wiki REST server and renders the results. It translates client
exceptions to exit codes the same way for every subcommand.
"""

import logging
from typing import Callable, List, Optional

from src.cli.models import CheckReport, ExitCode
from src.cli.output import OutputHandler
from src.rest_model import relations
from src.wiki_client.api_wrapper import RestClient, iter_links
from src.wiki_client.auth import Authenticator
from src.wiki_client.errors import (
    APIAccessError,
    APIUnreachableError,
    BadRequestError,
    InvalidCredentialsError,
    NotFoundError,
    UnmarshalError,
    WikiRestError,
)

logger = logging.getLogger(__name__)


class QueryCommand:
    """Runs queries against a wiki REST server for the CLI.

    Args:
        output_handler: Terminal output
        client: Optional RestClient (built from the environment when omitted)
        url: Optional API base URL overriding WIKI_REST_URL

    Example:
        >>> command = QueryCommand(OutputHandler(), url="http://localhost:8080")
        >>> command.pages("xwiki", name="WebHome")
        <ExitCode.SUCCESS: 0>
    """

    def __init__(
        self,
        output_handler: OutputHandler,
        client: Optional[RestClient] = None,
        url: Optional[str] = None
    ):
        self.output_handler = output_handler
        self._client = client
        self._url = url

    @property
    def client(self) -> RestClient:
        if self._client is None:
            self._client = RestClient(Authenticator(url=self._url))
        return self._client

    def wikis(self) -> ExitCode:
        def _run() -> ExitCode:
            result = self.client.list_wikis()
            self.output_handler.print_table(
                "Wikis",
                ["Id", "Name", "Owner", "Description"],
                [[w.id, w.name, w.owner or "", w.description or ""] for w in result.wikis],
            )
            return ExitCode.SUCCESS

        return self._execute("wikis", _run)

    def pages(
        self,
        wiki: str,
        name: Optional[str] = None,
        space: Optional[str] = None,
        author: Optional[str] = None,
        start: Optional[int] = None,
        number: Optional[int] = None
    ) -> ExitCode:
        def _run() -> ExitCode:
            result = self.client.list_pages(
                wiki, name=name, space=space, author=author, start=start, number=number
            )
            self.output_handler.print_table(
                f"Pages of {wiki}",
                ["Full name", "Title", "Parent"],
                [[p.full_name, p.title, p.parent] for p in result.page_summaries],
            )
            return ExitCode.SUCCESS

        return self._execute("pages", _run)

    def attachments(
        self,
        wiki: str,
        name: Optional[str] = None,
        space: Optional[str] = None,
        page: Optional[str] = None,
        author: Optional[str] = None,
        types: Optional[str] = None,
        start: Optional[int] = None,
        number: Optional[int] = None
    ) -> ExitCode:
        def _run() -> ExitCode:
            result = self.client.list_attachments(
                wiki,
                name=name,
                space=space,
                page=page,
                author=author,
                types=types,
                start=start,
                number=number,
            )
            self.output_handler.print_table(
                f"Attachments of {wiki}",
                ["Name", "Page", "Type", "Size"],
                [
                    [a.name, a.page_id, a.mime_type, str(a.size)]
                    for a in result.attachments
                ],
            )
            return ExitCode.SUCCESS

        return self._execute("attachments", _run)

    def search(
        self,
        wiki: str,
        q: str,
        scopes: Optional[List[str]] = None,
        start: Optional[int] = None,
        number: Optional[int] = None
    ) -> ExitCode:
        def _run() -> ExitCode:
            result = self.client.search(wiki, q, scope=scopes, start=start, number=number)
            self.output_handler.print_table(
                f"Search '{q}' in {wiki}",
                ["Type", "Name", "Title", "Score"],
                [
                    [r.type, r.page_full_name or r.space, r.title or "", f"{r.score:.2f}"]
                    for r in result.search_results
                ],
            )
            return ExitCode.SUCCESS

        return self._execute("search", _run)

    def check(self) -> ExitCode:
        """Verify wiki capabilities and that every advertised link resolves.

        Fetches the wiki list, checks each wiki for the mandatory relations,
        then GETs every link of the wikis, of each wiki's page list and of
        each wiki's attachment list.

        Returns:
            ExitCode.SUCCESS if everything resolves, ExitCode.CHECK_FAILED
            otherwise (or the error exit code of a failing request)
        """
        def _run() -> ExitCode:
            report = CheckReport()
            with self.output_handler.spinner("Checking wikis..."):
                wikis = self.client.list_wikis()
                report.wikis_checked = len(wikis.wikis)

                for wiki in wikis.wikis:
                    for relation in relations.WIKI_CAPABILITIES:
                        if wiki.get_first_link_by_relation(relation) is None:
                            report.missing_relations.append((wiki.id, relation))

                representations = [wikis]
                for wiki in wikis.wikis:
                    self.output_handler.debug(f"Collecting pages and attachments of {wiki.id}")
                    representations.append(self.client.list_pages(wiki.id))
                    representations.append(self.client.list_attachments(wiki.id))

                for representation in representations:
                    report.links_checked += len(list(iter_links(representation)))
                    report.broken_links.extend(
                        (link.href, status_code)
                        for link, status_code in self.client.check_links(representation)
                    )

            logger.info(
                f"Checked {report.links_checked} link(s) across {report.wikis_checked} wiki(s)"
            )
            self.output_handler.print_check_summary(report)
            return ExitCode.SUCCESS if report.passed else ExitCode.CHECK_FAILED

        return self._execute("check", _run)

    def _execute(self, command: str, action: Callable[[], ExitCode]) -> ExitCode:
        """Run a command body and translate client exceptions to exit codes."""
        try:
            return action()

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.info(
                "Check WIKI_REST_URL, WIKI_REST_USER and WIKI_REST_PASSWORD environment variables"
            )
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            self.output_handler.info("Check that the server is running and try again")
            return ExitCode.NETWORK_ERROR

        except NotFoundError as e:
            logger.error(f"Not found: {e}")
            self.output_handler.error(str(e))
            return ExitCode.NOT_FOUND

        except (BadRequestError, UnmarshalError) as e:
            logger.error(f"{command} failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except WikiRestError as e:
            logger.error(f"{command} failed: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception(f"Unexpected error during {command}")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
