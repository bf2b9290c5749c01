from domain.exceptions.currency import PreferencesError
from domain.models.currency import DisplayPreferences


def test_get_preferences(client):
	response = client.get('/api/preferences')

	assert response.status_code == 200
	assert response.json() == {'base_currency': 'USD', 'displayed_currencies': ['EUR', 'GBP']}


def test_change_base_currency_refetches(client, mock_fetcher, mock_repository, rate_store):
	response = client.put('/api/preferences/base-currency', json={'currency': 'eur'})

	assert response.status_code == 200
	assert response.json()['base_currency'] == 'EUR'
	mock_repository.save.assert_awaited_once()
	mock_fetcher.fetch.assert_awaited_once_with('EUR')
	assert rate_store.base_currency == 'EUR'


def test_same_base_currency_does_not_refetch(client, mock_fetcher, mock_repository):
	response = client.put('/api/preferences/base-currency', json={'currency': 'USD'})

	assert response.status_code == 200
	mock_repository.save.assert_not_awaited()
	mock_fetcher.fetch.assert_not_awaited()


def test_unsupported_base_currency_is_rejected(client, mock_fetcher):
	response = client.put('/api/preferences/base-currency', json={'currency': 'BTC'})

	assert response.status_code == 400
	assert 'BTC' in response.json()['detail']
	mock_fetcher.fetch.assert_not_awaited()


def test_base_currency_wrong_length_is_422(client):
	response = client.put('/api/preferences/base-currency', json={'currency': 'EURO'})

	assert response.status_code == 422


def test_replace_displayed_currencies(client, mock_repository):
	response = client.put(
		'/api/preferences/displayed-currencies', json={'currencies': ['jpy', 'CHF', 'JPY']}
	)

	assert response.status_code == 200
	assert response.json()['displayed_currencies'] == ['JPY', 'CHF']
	saved = mock_repository.save.await_args.args[0]
	assert saved == DisplayPreferences(base_currency='USD', displayed_currencies=('JPY', 'CHF'))


def test_toggle_currency_on(client):
	response = client.put('/api/preferences/displayed-currencies/PLN', json={'enabled': True})

	assert response.status_code == 200
	assert response.json()['displayed_currencies'] == ['EUR', 'GBP', 'PLN']


def test_toggle_currency_off(client):
	response = client.put('/api/preferences/displayed-currencies/EUR', json={'enabled': False})

	assert response.status_code == 200
	assert response.json()['displayed_currencies'] == ['GBP']


def test_save_failure_is_500(client, mock_repository):
	mock_repository.save.side_effect = PreferencesError('disk full')

	response = client.put('/api/preferences/displayed-currencies', json={'currencies': ['EUR']})

	assert response.status_code == 500
	assert response.json() == {'detail': 'Display preferences could not be saved'}


def test_openapi_schema_carries_request_and_response_examples(client):
	schemas = client.get('/openapi.json').json()['components']['schemas']

	assert schemas['BaseCurrencyUpdate']['example'] == {'currency': 'EUR'}
	assert schemas['DisplayedCurrenciesUpdate']['example'] == {'currencies': ['EUR', 'JPY', 'GBP']}
	assert schemas['RatesResponse']['example']['status'] == 'loaded'
	assert schemas['CurrenciesResponse']['examples'][0]['currencies'][0] == 'USD'
