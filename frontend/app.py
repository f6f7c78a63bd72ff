import os

import pandas as pd
import requests
import streamlit as st

from features import features_to_rows
from geocoding import GeocodingError, build_geocoder, geocode_address

st.set_page_config(
    page_title="Nearby Drop-off Locator",
    page_icon="📍",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        color: #2E7D32;
        text-align: center;
        padding: 1rem 0;
        font-weight: bold;
    }
    .success-box {
        padding: 1rem;
        background-color: #207a27;
        border-radius: 0.5rem;
        border-left: 4px solid #43A047;
        margin: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)

# Backend API configuration
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8080")
AUSTIN = (30.2672, -97.7431)
DEFAULT_RADIUS = 10000

if "features" not in st.session_state:
    st.session_state.features = None
    st.session_state.search_error = None
    st.session_state.lat, st.session_state.lng = AUSTIN
    st.session_state.radius = DEFAULT_RADIUS
    st.session_state.needs_search = True  # first render searches around Austin

@st.cache_resource
def get_geocoder():
    return build_geocoder()

def search_backend(lat: float, lng: float, radius: int) -> dict:
    """Call /api/search; always returns the backend envelope shape."""
    try:
        response = requests.get(
            f"{BACKEND_URL}/api/search",
            params={"lat": lat, "lng": lng, "radius": radius},
            timeout=15
        )
        return response.json()
    except requests.exceptions.ConnectionError:
        return {"status": "error", "error": "Cannot connect to backend. Make sure it is running on port 8080."}
    except requests.exceptions.Timeout:
        return {"status": "error", "error": "Search timed out. Try a smaller radius."}
    except ValueError:
        return {"status": "error", "error": "Backend returned a response that is not JSON."}

def check_backend_health() -> bool:
    try:
        response = requests.get(f"{BACKEND_URL}/health", timeout=2)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False

def run_search():
    result = search_backend(st.session_state.lat, st.session_state.lng, st.session_state.radius)
    if result.get("status") == "ok":
        st.session_state.features = result.get("features", [])
        st.session_state.search_error = None
    else:
        st.session_state.features = None
        st.session_state.search_error = result.get("error", "Unknown error")

def on_address_search():
    """Geocode the address, move the center there and search. Runs before widgets are redrawn."""
    try:
        lat, lng = geocode_address(st.session_state.address, get_geocoder())
    except GeocodingError as e:
        st.session_state.search_error = str(e)
        return
    st.session_state.lat, st.session_state.lng = lat, lng
    st.session_state.needs_search = True

def on_coordinate_search():
    st.session_state.needs_search = True

st.markdown('<div class="main-header">📍 Nearby Drop-off Locator</div>', unsafe_allow_html=True)

with st.sidebar:
    st.header("⚙️ Search")

    backend_status = check_backend_health()
    if backend_status:
        st.markdown('<div class="success-box">✅ Backend Connected</div>', unsafe_allow_html=True)
    else:
        st.warning("Backend disconnected. Run `python run.py` in the backend folder.")

    st.text_input("Address or place", key="address", placeholder="e.g. 301 W 2nd St, Austin, TX")
    st.button("📫 Search address", use_container_width=True, disabled=not backend_status, on_click=on_address_search)

    st.divider()

    st.number_input("Latitude", key="lat", min_value=-90.0, max_value=90.0, format="%.5f")
    st.number_input("Longitude", key="lng", min_value=-180.0, max_value=180.0, format="%.5f")
    st.slider("Radius (meters)", key="radius", min_value=500, max_value=50000, step=500)
    st.button("🔍 Search coordinates", use_container_width=True, disabled=not backend_status, on_click=on_coordinate_search)

if st.session_state.needs_search and backend_status:
    st.session_state.needs_search = False
    with st.spinner("Searching database..."):
        run_search()

if st.session_state.search_error:
    st.error(st.session_state.search_error)

features = st.session_state.features
if features is None:
    st.info("Enter an address or coordinates, then search. At most the 25 nearest locations are shown.")
elif not features:
    st.info("No locations found within the selected radius.")
else:
    rows = features_to_rows(features)
    df = pd.DataFrame(rows)
    st.subheader(f"{len(rows)} nearest locations")
    st.map(df[["lat", "lon"]])
    st.dataframe(df, use_container_width=True)
