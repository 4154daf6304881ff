"""
Volkszaehler datasource bridge for Grafana's SimpleJSON plugin.

The service answers Grafana datasource requests (search, query, annotations)
by translating them into calls against the volkszaehler middleware JSON API.
"""
