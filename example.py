# example.py
# A small example demonstrating how to use the url_analyser
# library to analyse a page and print its report.

import asyncio
import logging

from url_analyser import analyse_url, is_submittable
from url_analyser.models import Failed, Succeeded

# --- Configuration ---
# You can enable logging to see each request and state transition.
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

# The page to analyse, and where the analysis service is listening.
TARGET_URL = "https://www.python.org"
SERVICE_URL = "http://localhost:8080"


async def main():
    """
    Main function to run one analysis and print the outcome.
    """
    if not is_submittable(TARGET_URL):
        print(f"[!] {TARGET_URL} would not be accepted for analysis.")
        return

    print(f"[*] Analysing: {TARGET_URL}\n")

    # Print each state the session passes through.
    state = await analyse_url(
        TARGET_URL,
        base_url=SERVICE_URL,
        listener=lambda s: print(f"    state -> {s.mode.value}"),
    )

    if isinstance(state, Succeeded):
        report = state.report
        print("\n--- ANALYSIS COMPLETE ---")
        print(f"Title: {report.page_title}")
        print(
            f"Links: {report.total_links} "
            f"({report.links_by_type.internal} internal, "
            f"{report.links_by_type.external} external, "
            f"{report.inaccessible_links} inaccessible)"
        )
        print(f"Login form: {'yes' if report.login_form_present else 'no'}")
        for level, count in report.heading_counts.as_dict().items():
            print(f"  {level}: {count}")
    elif isinstance(state, Failed):
        descriptor = state.descriptor
        print(f"\n[!] Analysis failed ({descriptor.kind}): {descriptor.message}")


if __name__ == "__main__":
    # The library is async, so we use asyncio.run() to start it.
    asyncio.run(main())
