import argparse
import asyncio
import sys
from pathlib import Path

import httpx
from dotenv import load_dotenv

from scholaragent.config.settings import Settings
from scholaragent.core.config_loader import get_config
from scholaragent.core.pipeline import PipelineController
from scholaragent.errors import ConfigurationError
from scholaragent.export import build_bib_file, generate_bibliography
from scholaragent.llm import AgentPurpose, LLMClientFactory
from scholaragent.modules.synthesis import ResearchSynthesizer
from scholaragent.research import (
	BibliographicResolver,
	LoggingProgressListener,
	ReferenceValidator,
	SearchAgentRunner,
	SearchOrchestrator,
)
from scholaragent.utils.logger import logger


def build_pipeline(settings: Settings, http_client: httpx.AsyncClient, roster_name: str | None = None) -> PipelineController:
	client_factory = LLMClientFactory.from_settings(settings)
	roster = get_config().get_roster(roster_name or settings.AGENT_ROSTER)

	resolver = BibliographicResolver.from_settings(http_client, settings)
	validator = ReferenceValidator(resolver, max_concurrency=settings.VALIDATION_CONCURRENCY)
	runner = SearchAgentRunner.from_settings(client_factory, settings)
	orchestrator = SearchOrchestrator.from_settings(runner, validator, roster, settings)
	synthesizer = ResearchSynthesizer(client_factory.for_purpose(AgentPurpose.SYNTHESIS))

	return PipelineController(orchestrator, synthesizer, listener=LoggingProgressListener())


async def run(args: argparse.Namespace) -> int:
	settings = Settings()

	async with httpx.AsyncClient(follow_redirects=True) as http_client:
		pipeline = build_pipeline(settings, http_client, args.roster)
		await pipeline.toggle_preprints(args.preprints)
		references = await pipeline.submit_domain(args.domain) or []

	audit = pipeline.audit()
	print(f'\nDomain: {args.domain}')
	print(f'References: {audit.total} ({audit.summary()}, health {audit.health_score}/100)')
	for ref in references:
		mark = '✓' if ref.is_verified else '?'
		print(f'  [{mark}] {ref.title} ({ref.year}) {ref.doi or ""} [{ref.source}]')

	if args.bib:
		Path(args.bib).write_text(build_bib_file(references))
		logger.info(f'BibTeX written to {args.bib}')
	if args.latex:
		Path(args.latex).write_text(generate_bibliography(references))
		logger.info(f'LaTeX bibliography written to {args.latex}')
	return 0


def main():
	load_dotenv()

	parser = argparse.ArgumentParser(description='ScholarAgent literature search')
	parser.add_argument('domain', help='Research domain or draft idea')
	parser.add_argument('--preprints', action='store_true', help='Allow preprint-aware agents to include preprints')
	parser.add_argument('--roster', help='Agent roster from agents.yaml (default: AGENT_ROSTER)')
	parser.add_argument('--bib', help='Write verified references as a .bib file')
	parser.add_argument('--latex', help='Write a thebibliography environment')

	args = parser.parse_args()

	try:
		sys.exit(asyncio.run(run(args)))
	except ConfigurationError as e:
		print(f'\nConfiguration error: {e}')
		sys.exit(1)
	except KeyboardInterrupt:
		print('\n\nSearch interrupted.')
		sys.exit(0)


if __name__ == '__main__':
	main()
