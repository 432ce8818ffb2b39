from battery_alerts.main import create_app

app = create_app()
