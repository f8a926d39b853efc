import asyncio

from scholaragent.models import Reference, SourceRecord, SearchSession


def make_reference(title: str = 'Attention Is All You Need', **kwargs) -> Reference:
	kwargs.setdefault('source', 'IEEE Xplore')
	return Reference(title=title, **kwargs)


class FakeSource:
	"""In-memory bibliographic source keyed by DOI."""

	def __init__(self, name, records=None, error=None, title_results=None):
		self.name = name
		self.records = records or {}
		self.error = error
		self.title_results = title_results or {}
		self.lookups = []
		self.title_searches = []

	async def lookup_by_doi(self, doi):
		self.lookups.append(doi)
		if self.error:
			raise self.error
		return self.records.get(doi)

	async def search_by_title(self, title):
		self.title_searches.append(title)
		return self.title_results.get(title)


class FakeGenerator:
	"""Replays scripted responses in order. Exceptions in the script are raised."""

	def __init__(self, responses):
		self.responses = list(responses)
		self.prompts = []

	async def generate(self, prompt, system_prompt=None, web_search=False):
		self.prompts.append(prompt)
		response = self.responses.pop(0) if self.responses else '[]'
		if isinstance(response, Exception):
			raise response
		return response

	@property
	def calls(self):
		return len(self.prompts)


class FakeClientFactory:
	def __init__(self, generators):
		self.generators = generators
		self.requests = []

	def for_purpose(self, purpose, distinct_id=None):
		self.requests.append((purpose, distinct_id))
		return self.generators[distinct_id]


class FakeResolver:
	"""Marks references verified when their DOI is in ``known_dois``."""

	def __init__(self, known_dois=(), delays=None, errors=()):
		self.known_dois = set(known_dois)
		self.delays = delays or {}
		self.errors = set(errors)
		self.in_flight = 0
		self.max_in_flight = 0

	async def resolve(self, reference):
		self.in_flight += 1
		self.max_in_flight = max(self.max_in_flight, self.in_flight)
		try:
			await asyncio.sleep(self.delays.get(reference.title, 0))
			if reference.title in self.errors:
				raise RuntimeError('source outage')
			reference.is_verified = reference.doi in self.known_dois
			return reference
		finally:
			self.in_flight -= 1


class GatedOrchestrator:
	"""Holds the first search open until ``release`` is set."""

	def __init__(self):
		self.release = asyncio.Event()
		self.calls = []

	async def run_session(self, topic, include_preprints=False, listener=None, context='', generation=0):
		self.calls.append(include_preprints)
		if len(self.calls) == 1:
			await self.release.wait()
		references = [make_reference(f'{topic} survey (preprints={include_preprints})', doi='10.1000/x', is_verified=True)]
		return SearchSession(topic, include_preprints, generation=generation, references=references)


def source_record(source: str, **kwargs) -> SourceRecord:
	return SourceRecord(source=source, **kwargs)
