"""
Demo: Walk through a full survey session and print the result.
"""

import logging
import tempfile

from selfassess.config import EngineConfig, build_session
from selfassess.presentation import SurveyController
from selfassess.serialization import result_to_dict, snapshot_to_yaml
from selfassess.sharing import build_share_summary


def print_view(update):
    print(f"  [{update.page}] {update.progress_label} ({update.progress_percent:.0f}%)")
    if update.message:
        print(f"  ⚠️  {update.message} Missing: {list(update.missing)}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        config = EngineConfig(storage_dir=tmp, share_url="https://example.org/assessment")
        session = build_session(config)
        controller = SurveyController(session.engine)

        print()
        print("=" * 70)
        print("SELF-ASSESSMENT DEMO")
        print("=" * 70)
        print_view(controller.start())

        # Try to skip ahead without answering
        print_view(controller.next_part())

        pattern = [0, 1, 2, 3, 1, 2]
        for section in range(1, 6):
            start, end = session.engine.section_range(section)
            for offset, question in enumerate(range(start, end + 1)):
                controller.select(question, pattern[offset])
            if section < 5:
                print_view(controller.next_part())

        print()
        print("📝 SAVED SNAPSHOT (YAML)")
        print(snapshot_to_yaml(session.engine.snapshot()))

        update = controller.show_results()
        print("📊 RESULT")
        for key, value in result_to_dict(update.result).items():
            print(f"  {key}: {value}")

        share = build_share_summary(config.share_url)
        print()
        print("🔗 SHARE")
        print(share.as_clipboard_text())
        print()


if __name__ == "__main__":
    main()
