from domain.models.currency import DEFAULT_DISPLAYED_CURRENCIES, DisplayPreferences, is_currency_code
from domain.models.rates import ErrorKind, FetchState, FetchStatus, RateSnapshot


def test_snapshot_equality_and_hash():
	a = RateSnapshot('success', 'USD', 'now', {'EUR': 0.9})
	b = RateSnapshot('success', 'USD', 'now', {'EUR': 0.9})

	assert a == b
	assert hash(a) == hash(b)
	assert a != RateSnapshot('success', 'USD', 'now', {'EUR': 0.91})


def test_snapshot_copies_input_mapping():
	rates = {'EUR': 0.9}
	snapshot = RateSnapshot('success', 'USD', 'now', rates)
	rates['EUR'] = 5.0

	assert snapshot.rate_for('EUR') == 0.9
	assert snapshot.rate_for('GBP') is None


def test_fetch_state_constructors():
	assert FetchState.idle().status is FetchStatus.IDLE
	assert FetchState.loading('USD').is_loading is True

	failed = FetchState.failed('USD', ErrorKind.DECODING, 'Decoding Error: x')
	assert failed.is_loading is False
	assert failed.snapshot is None
	assert failed.error_kind is ErrorKind.DECODING


def test_default_preferences():
	prefs = DisplayPreferences()

	assert prefs.base_currency == 'USD'
	assert prefs.displayed_currencies == DEFAULT_DISPLAYED_CURRENCIES


def test_toggled_off_removes_every_occurrence():
	prefs = DisplayPreferences(displayed_currencies=('EUR', 'GBP', 'EUR'))

	assert prefs.toggled('EUR', False).displayed_currencies == ('GBP',)


def test_is_currency_code():
	assert is_currency_code('USD')
	assert not is_currency_code('usd')
	assert not is_currency_code(None)
