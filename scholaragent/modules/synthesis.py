from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scholaragent.errors import SynthesisError
from scholaragent.llm import TextGenerator
from scholaragent.models import MethodologyOption, Reference, ResearchTopic
from scholaragent.research.parsing import extract_json_array
from scholaragent.utils.logger import logger

RICH_CONTEXT_LIMIT = 15
BASIC_CONTEXT_LIMIT = 20
METHODOLOGY_CONTEXT_LIMIT = 25


class _TopicItem(BaseModel):
	model_config = ConfigDict(extra='ignore', populate_by_name=True)

	id: str
	title: str
	description: str = ''
	gap: str = ''
	novelty_score: int = Field(default=50, alias='noveltyScore')
	feasibility: str = 'Medium'

	@field_validator('id', mode='before')
	@classmethod
	def coerce_id(cls, value):
		return str(value)

	@field_validator('novelty_score', mode='before')
	@classmethod
	def clamp_score(cls, value):
		try:
			return max(1, min(100, int(value)))
		except (TypeError, ValueError):
			return 50

	@field_validator('feasibility')
	@classmethod
	def normalize_feasibility(cls, value: str) -> str:
		value = value.strip().capitalize()
		return value if value in ('High', 'Medium', 'Low') else 'Medium'


class _MethodologyItem(BaseModel):
	model_config = ConfigDict(extra='ignore')

	id: str
	name: str
	description: str = ''
	implications: str = ''
	justification: str = ''

	@field_validator('id', mode='before')
	@classmethod
	def coerce_id(cls, value):
		return str(value)


class ResearchSynthesizer:
	def __init__(self, llm_client: TextGenerator):
		self.llm_client = llm_client

	async def generate_topics(self, domain: str, references: Sequence[Reference]) -> list[ResearchTopic]:
		logger.info(f'Synthesizing research topics from {len(references)} references')
		response = await self._generate(self._build_topic_prompt(domain, references))

		topics = []
		for raw in extract_json_array(response).items:
			try:
				item = _TopicItem.model_validate(raw)
			except ValidationError as e:
				logger.warning(f'Skipping malformed topic: {e.error_count()} error(s)')
				continue
			topics.append(
				ResearchTopic(
					id=item.id,
					title=item.title,
					description=item.description,
					gap=item.gap,
					novelty_score=item.novelty_score,
					feasibility=item.feasibility,
				)
			)
		return topics

	async def propose_methodologies(self, topic_title: str, references: Sequence[Reference]) -> list[MethodologyOption]:
		logger.info(f'Proposing methodologies for: {topic_title}')
		response = await self._generate(self._build_methodology_prompt(topic_title, references))

		options = []
		for raw in extract_json_array(response).items:
			try:
				item = _MethodologyItem.model_validate(raw)
			except ValidationError as e:
				logger.warning(f'Skipping malformed methodology: {e.error_count()} error(s)')
				continue
			options.append(MethodologyOption(**item.model_dump()))
		return options

	async def _generate(self, prompt: str) -> str:
		try:
			return await self.llm_client.generate(prompt)
		except Exception as e:
			raise SynthesisError(f'Synthesis call failed: {e}') from e

	def _build_topic_prompt(self, domain: str, references: Sequence[Reference]) -> str:
		rich = [r for r in references if r.is_verified and r.abstract][:RICH_CONTEXT_LIMIT]
		basic = [r for r in references if not (r.is_verified and r.abstract)][:BASIC_CONTEXT_LIMIT]

		rich_context = '\n\n'.join(
			f"""PAPER [{i}]
Title: {r.title}
Year: {r.year}
Venue: {r.venue or r.source}
Citations: {r.citation_count if r.citation_count is not None else 'N/A'}
Abstract: {r.abstract}"""
			for i, r in enumerate(rich, 1)
		)
		basic_context = '\n'.join(f'[Paper] {r.title} ({r.year})' for r in basic)

		return f"""I have conducted a systematic literature review in the domain of: "{domain}".

Verified papers with abstracts:
{rich_context or 'None'}

Additional scanned papers:
{basic_context or 'None'}

ROLE: Senior Research Scientist.
TASK: Generate 5 NOVEL research topics grounded in the papers above.
1. Identify specific technical limitations stated in the abstracts.
2. Find contradictions between papers.
3. Note what is over-researched.
4. Propose contributions that combine ideas from different papers.

Return ONLY a JSON array:
[{{"id": "1", "title": "...", "description": "...", "gap": "...", "noveltyScore": 85, "feasibility": "High|Medium|Low"}}]"""

	def _build_methodology_prompt(self, topic_title: str, references: Sequence[Reference]) -> str:
		context = '\n'.join(f'- {r.title} ({r.year}) [{r.source}]' for r in references[:METHODOLOGY_CONTEXT_LIMIT])

		return f"""Research topic: "{topic_title}"

Related literature:
{context or 'None'}

Propose 3-4 distinct research methodologies suitable for this topic.

Return ONLY a JSON array:
[{{"id": "1", "name": "...", "description": "...", "implications": "...", "justification": "..."}}]"""
