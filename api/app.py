import os
import sys
import logging
import threading
import time
import uuid
from flask import Flask, request, jsonify

# Ensure project root is in path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from pronunciation import config
from pronunciation.analyzer import SessionAnalyzer
from pronunciation.feedback import score_band
from pronunciation.history import JsonFileHistoryStore, history_stats
from pronunciation.live import LiveAnalysisLoop, TranscriptBuffer
from pronunciation.phonetics import phonetic_breakdown
from pronunciation.rules import DEFAULT_TARGET, PRACTICE_PHRASES
from pronunciation.speech import target_playback_request

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = Flask(__name__)

ANALYZER = SessionAnalyzer(history=JsonFileHistoryStore())

# ============================================================================
# LIVE SESSION STORE
# ============================================================================
SESSION_STORE = {}  # {session_id: {loop, transcript, last_seen}}
SESSION_LOCK = threading.Lock()
SESSION_LIMIT = config.SESSION_LIMIT
SESSION_TTL = config.SESSION_TTL


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(data, key, required=True, default=""):
    """Return (value, error_response)."""
    if key not in data:
        if required:
            return None, (jsonify({"error": f"Missing field: {key}"}), 400)
        return default, None
    value = data[key]
    if not isinstance(value, str):
        return None, (jsonify({"error": f"Field {key} must be a string"}), 400)
    return value, None


def _result_payload(result):
    payload = result.to_dict()
    payload['overallBand'] = score_band(result.overall_score)
    for word in payload['wordBreakdown']:
        word['band'] = score_band(word['score'])
    return payload


def _get_session(session_id):
    with SESSION_LOCK:
        session = SESSION_STORE.get(session_id)
        if session is not None:
            session['last_seen'] = time.monotonic()
        return session


def _prune_sessions():
    """Drop idle sessions, then the least recently used ones, to make room for one more."""
    now = time.monotonic()
    with SESSION_LOCK:
        evicted = [sid for sid, s in SESSION_STORE.items() if now - s['last_seen'] > SESSION_TTL]
        by_age = sorted(
            (sid for sid in SESSION_STORE if sid not in evicted),
            key=lambda sid: SESSION_STORE[sid]['last_seen'],
        )
        overflow = len(by_age) - (SESSION_LIMIT - 1)
        if overflow > 0:
            evicted.extend(by_age[:overflow])
        sessions = [SESSION_STORE.pop(sid) for sid in evicted]
    for session in sessions:
        session['loop'].reset()
    if evicted:
        logger.info(f"Evicted sessions: {', '.join(evicted)}")


def _session_payload(session_id, session):
    loop = session['loop']
    return {
        "session_id": session_id,
        "state": loop.state.value,
        "target": loop.target,
        "transcript": session['transcript'](),
        "running_score": loop.running_score,
        "error": str(loop.error) if loop.error else None,
    }

# ============================================================================
# ROUTES - ANALYSIS
# ============================================================================
@app.route('/api/analyze', methods=['POST'])
def analyze():
    """Score a finished transcript against a target phrase and store it."""
    data = _json_body()
    spoken, error = _text_field(data, 'spoken')
    if error:
        return error
    target, error = _text_field(data, 'target')
    if error:
        return error

    result, persisted = ANALYZER.analyze_and_persist(spoken, target)
    payload = _result_payload(result)
    payload['persisted'] = persisted
    return jsonify(payload)

@app.route('/api/phonetics', methods=['GET'])
def phonetics():
    text = request.args.get('text', DEFAULT_TARGET)
    return jsonify({"text": text, "tokens": phonetic_breakdown(text)})

@app.route('/api/practice-phrases', methods=['GET'])
def practice_phrases():
    return jsonify({"default": DEFAULT_TARGET, "phrases": list(PRACTICE_PHRASES)})

@app.route('/api/speech/target', methods=['POST'])
def speech_target():
    """Synthesis parameters for playing the target phrase in the browser."""
    data = _json_body()
    text, error = _text_field(data, 'text')
    if error:
        return error
    voices = data.get('voices') or []
    if not isinstance(voices, list) or not all(isinstance(v, dict) for v in voices):
        return jsonify({"error": "Field voices must be a list of objects"}), 400
    return jsonify(target_playback_request(text, voices).to_dict())

# ============================================================================
# ROUTES - HISTORY
# ============================================================================
@app.route('/api/history', methods=['GET'])
def get_history():
    results = ANALYZER.history.load() if ANALYZER.history is not None else []
    return jsonify({
        "results": [_result_payload(r) for r in results],
        "stats": history_stats(results),
    })

@app.route('/api/history', methods=['DELETE'])
def clear_history():
    if ANALYZER.history is not None:
        try:
            ANALYZER.history.clear()
        except OSError as e:
            logger.error(f"Could not clear history: {e}")
            return jsonify({"error": f"Could not clear history: {e}"}), 500
    return jsonify({"message": "History cleared"})

# ============================================================================
# ROUTES - LIVE SESSIONS
# ============================================================================
@app.route('/api/sessions', methods=['POST'])
def start_session():
    """Open a listening session; the running score refreshes every tick."""
    data = _json_body()
    target, error = _text_field(data, 'target', required=False, default=DEFAULT_TARGET)
    if error:
        return error

    session_id = str(uuid.uuid4())[:8]
    transcript = TranscriptBuffer()
    _prune_sessions()
    loop = LiveAnalysisLoop(transcript, ANALYZER)
    loop.start(target)
    with SESSION_LOCK:
        SESSION_STORE[session_id] = {'loop': loop, 'transcript': transcript, 'last_seen': time.monotonic()}
    logger.info(f"Session {session_id} listening for {target!r}")
    return jsonify({"session_id": session_id, "state": loop.state.value, "interval": loop.interval})

@app.route('/api/sessions/<session_id>', methods=['GET'])
def session_status(session_id):
    session = _get_session(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    return jsonify(_session_payload(session_id, session))

@app.route('/api/sessions/<session_id>/transcript', methods=['POST'])
def update_transcript(session_id):
    session = _get_session(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    transcript, error = _text_field(_json_body(), 'transcript')
    if error:
        return error
    session['transcript'].update(transcript)
    return jsonify(_session_payload(session_id, session))

@app.route('/api/sessions/<session_id>/stop', methods=['POST'])
def stop_session(session_id):
    """Close and remove the session; return the full analysis of the final transcript."""
    session = _get_session(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404

    data = _json_body()
    if 'transcript' in data:
        transcript, error = _text_field(data, 'transcript')
        if error:
            return error
        session['transcript'].update(transcript)

    with SESSION_LOCK:
        SESSION_STORE.pop(session_id, None)
    loop = session['loop']
    result = loop.stop()
    response = _session_payload(session_id, session)
    response['result'] = _result_payload(result) if result is not None else None
    response['persisted'] = loop.persisted
    return jsonify(response)

@app.route('/api/sessions/<session_id>', methods=['DELETE'])
def reset_session(session_id):
    with SESSION_LOCK:
        session = SESSION_STORE.pop(session_id, None)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    session['loop'].reset()
    return jsonify({"session_id": session_id, "state": session['loop'].state.value})

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
