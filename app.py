# app.py
import logging
import os
import threading

from flask import Flask, jsonify, request

from followyourflush.camera.surface import RecordingSurface
from followyourflush.camera.visualization import JourneyMapVisualizer
from followyourflush.path_planner.outfall import build_outfall_network
from followyourflush.session.core import FlushSession
from followyourflush.session.data_models import InputEvent, SessionConstants

app = Flask(__name__)
log = logging.getLogger('werkzeug')
log.setLevel(logging.WARNING)

FACILITIES_FILE_ENV = "FLUSH_FACILITIES_FILE"
CATCHMENTS_FILE_ENV = "FLUSH_CATCHMENTS_FILE"

# Global State Dictionary
state = {
    'session': None,
    'load_result': None
}


def get_session() -> FlushSession:
    if state['session'] is None:
        state['session'] = FlushSession(surface=RecordingSurface())
    return state['session']


def load_feature_data():
    """Loads plants and catchments from local files when configured, otherwise from the feature service."""
    session = get_session()
    facilities_path = os.getenv(FACILITIES_FILE_ENV)
    catchments_path = os.getenv(CATCHMENTS_FILE_ENV)
    if facilities_path and catchments_path:
        result = session.load_feature_files(facilities_path, catchments_path)
    else:
        result = session.load_features()
    state['load_result'] = result
    logging.info(f"Feature load finished: {result['message']}")


def _respond(result):
    return jsonify(result), (200 if result['success'] else 400)


@app.route('/')
def index():
    return jsonify({
        'service': 'follow-your-flush',
        'endpoints': ['/status', '/click', '/confirm', '/skip', '/camera', '/layers/<name>', '/settings', '/map']
    })


@app.route('/status')
def status():
    return jsonify(get_session().status())


@app.route('/click', methods=['POST'])
def click():
    data = request.get_json(silent=True) or {}
    try:
        lon, lat = float(data['lon']), float(data['lat'])
    except (KeyError, TypeError, ValueError):
        return jsonify({'error': 'lon and lat are required numbers.'}), 400
    return _respond(get_session().click(lon, lat))


@app.route('/confirm', methods=['POST'])
def confirm():
    return _respond(get_session().handle_event(InputEvent.CONFIRM))


@app.route('/skip', methods=['POST'])
def skip():
    return _respond(get_session().handle_event(InputEvent.SKIP))


@app.route('/camera')
def camera():
    session = get_session()
    with session.lock:
        return jsonify(session.surface.snapshot())


@app.route('/layers/<name>')
def layers(name):
    session = get_session()
    if name not in (SessionConstants.ROUTE_LAYER, SessionConstants.OUTFALL_LAYER):
        return jsonify({'error': f"Unknown layer '{name}'."}), 404
    with session.lock:
        return jsonify(session.surface.layer_geojson(name))


@app.route('/settings', methods=['POST'])
def settings():
    data = request.get_json(silent=True) or {}
    return _respond(get_session().update_settings(
        altitude_m=data.get('altitude_m'),
        tick_interval_ms=data.get('tick_interval_ms')
    ))


@app.route('/map')
def journey_map():
    session = get_session()
    with session.lock:
        facility = session.resolution.facility if session.resolution else None
        journey = JourneyMapVisualizer().create_journey_map(
            catchments=session.resolver.catchments,
            facility=facility,
            display_path=session.route.display_path if session.route else None,
            outfalls=build_outfall_network(session.resolver.facilities)
        )
    return journey.get_root().render()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    get_session()
    threading.Thread(target=load_feature_data, daemon=True).start()
    app.run(debug=True, use_reloader=False)
