from travel_relay.main import run

run()
