"""Real-time double pendulum simulation with a Streamlit front end."""
