"""
Flask REST API for TokenCalc
Exposes the calculator engine and its history as JSON endpoints
"""
from dataclasses import asdict
from flask import Flask, jsonify, request
from flask_cors import CORS
from calculator import UnknownKeyError
import config


def calculator_state(calculator):
    return {
        'display': calculator.display_value,
        'live_result': calculator.live_result,
        'tokens': calculator.tokens,
        'show_confirmation': calculator.show_confirmation,
    }


def create_app(calculator):
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    @app.route('/api')
    def api_info():
        """API information page"""
        return f"""
        <html>
        <head><title>{config.APP_NAME} API</title></head>
        <body style="font-family: Arial; padding: 40px;">
            <h1>{config.APP_NAME} API Server</h1>
            <h2>Available Endpoints:</h2>
            <ul>
                <li><a href="/api/state">/api/state</a> - Display and live result</li>
                <li>POST /api/press - Press a key, body: {{"key": "7"}}</li>
                <li><a href="/api/calculations">/api/calculations</a> - Calculation history</li>
                <li>POST /api/clear-all - Ask to clear everything</li>
                <li>POST /api/clear-all/confirm - Clear buffer and history</li>
                <li>POST /api/clear-all/cancel - Keep everything</li>
            </ul>
        </body>
        </html>
        """

    @app.route('/api/state')
    def get_state():
        """Get the current display and live result"""
        try:
            return jsonify({'success': True, 'data': calculator_state(calculator)})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/press', methods=['POST'])
    def press_key():
        """Apply a key press"""
        payload = request.get_json(silent=True)
        key = payload.get('key') if isinstance(payload, dict) else None
        if not isinstance(key, str):
            return jsonify({'success': False, 'error': "Missing 'key'"}), 400

        try:
            calculator.press(key)
            return jsonify({'success': True, 'data': calculator_state(calculator)})
        except UnknownKeyError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/calculations')
    def get_calculations():
        """Get calculation history"""
        try:
            limit = int(request.args.get('limit', config.MAX_HISTORY_ITEMS))
        except ValueError:
            return jsonify({'success': False, 'error': "Invalid 'limit'"}), 400

        try:
            calculations = calculator.history_manager.get_calculation_history(limit)
            formatted = [asdict(c) for c in calculations]
            return jsonify({
                'success': True,
                'data': formatted,
                'count': len(formatted)
            })
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/clear-all', methods=['POST'])
    def clear_all():
        """Show the clear-all confirmation"""
        calculator.clear_all_dialog()
        return jsonify({'success': True, 'data': calculator_state(calculator)})

    @app.route('/api/clear-all/confirm', methods=['POST'])
    def confirm_clear_all():
        """Clear the buffer and the whole history"""
        try:
            calculator.confirm_clear_all()
            return jsonify({'success': True, 'data': calculator_state(calculator)})
        except Exception as e:
            return jsonify({'success': False, 'error': str(e)}), 500

    @app.route('/api/clear-all/cancel', methods=['POST'])
    def cancel_clear_all():
        """Hide the clear-all confirmation"""
        calculator.cancel_clear_all()
        return jsonify({'success': True, 'data': calculator_state(calculator)})

    return app
