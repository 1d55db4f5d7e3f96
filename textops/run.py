from __future__ import annotations

import asyncio
import json
import logging
import sys

from .analyser import Analyser
from .batch import analyse_frame, batch_report, load_texts, write_results
from .config import TextOpsConfig, save_config_snapshot
from .lexicon_loader import LexiconCache


async def _run(config: TextOpsConfig) -> None:
    cache = LexiconCache.from_config(config)
    if config.idf_corpus_path:
        corpus = load_texts(config.idf_corpus_path)
        cache.load_corpus_idf(corpus["text"])
    if not config.offline:
        await cache.ensure_loaded()

    options = config.to_options()
    if not options:
        logging.warning("No operations selected; output will equal input.")

    if config.text is not None:
        result = Analyser(config.text, options, config=config, cache=cache).run()
        print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    texts = load_texts(config.input_path)
    results = await analyse_frame(texts, options, config, cache=cache)
    write_results(results, config)
    batch_report(results, config)
    save_config_snapshot(config)


def main(argv=None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    config = TextOpsConfig.from_args(argv)
    logging.info("Starting textops run with run_id %s", config.ensure_run_id())
    asyncio.run(_run(config))


if __name__ == "__main__":
    main(sys.argv[1:])
