import json

import pytest
from fakes import FakeGenerator, make_reference

from scholaragent.errors import SynthesisError
from scholaragent.modules.synthesis import ResearchSynthesizer


async def test_generate_topics_normalizes_items():
	response = json.dumps(
		[
			{'id': 1, 'title': 'Topic one', 'noveltyScore': 150, 'feasibility': 'LOW'},
			{'id': '2', 'title': 'Topic two', 'noveltyScore': 'n/a', 'feasibility': 'unclear'},
			{'id': '3', 'description': 'missing title'},
		]
	)
	synthesizer = ResearchSynthesizer(FakeGenerator([response]))

	topics = await synthesizer.generate_topics('robotics', [make_reference()])

	assert [t.id for t in topics] == ['1', '2']
	assert topics[0].novelty_score == 100
	assert topics[0].feasibility == 'Low'
	assert topics[1].novelty_score == 50
	assert topics[1].feasibility == 'Medium'


async def test_topic_prompt_separates_rich_and_basic_context():
	generator = FakeGenerator(['[]'])
	refs = [
		make_reference('Rich paper', is_verified=True, abstract='An abstract long enough to be useful context.'),
		make_reference('Basic paper'),
	]

	await ResearchSynthesizer(generator).generate_topics('robotics', refs)

	prompt = generator.prompts[0]
	assert 'Title: Rich paper' in prompt
	assert '[Paper] Basic paper (n.d.)' in prompt


async def test_propose_methodologies():
	response = '```json\n[{"id": 1, "name": "Case study", "justification": "fits"}]\n```'

	options = await ResearchSynthesizer(FakeGenerator([response])).propose_methodologies('Topic', [])

	assert options[0].id == '1'
	assert options[0].name == 'Case study'
	assert options[0].implications == ''


async def test_generation_failure_raises_synthesis_error():
	with pytest.raises(SynthesisError):
		await ResearchSynthesizer(FakeGenerator([RuntimeError('boom')])).generate_topics('x', [])
