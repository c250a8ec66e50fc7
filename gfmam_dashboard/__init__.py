"""
GFMAM Society Dashboard

Analytics backend turning the published "Society Data" Google Sheet into
validated KPI summaries and chart-ready series.

To swap the Google Sheet for another source:
    Anything that produces CSV text can feed loaders.normalize_csv(); use
    loaders.load_csv_file() for a local export. Everything downstream works
    on the resulting RecordSet.

To connect to Streamlit/Dash:
    Build a dashboard.DashboardSession (or await DashboardSession.refresh())
    and call kpi_cards(), chart_series(selection) and radar(name).

To add new KPIs:
    Add a KpiDefinition to config.KPI_REGISTRY naming the sheet column it
    reads. Bar charts, radar axes and summary cards pick it up from there.
"""
