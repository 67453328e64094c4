"""
WhatsApp message templates
Each template declares its required fields and renders a formatted message
"""

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

SEPARATOR = "━━━━━━━━━━━━━━━━━━━━━━━━"
SIGNATURE = "_ElectroHuila - Energía para tu hogar_"


def _line(label: str, value: Any) -> str:
    """Optional '*label:* value' line, empty when value is blank"""
    return f"{label} {value}\n" if value else ""


def _section(title: str) -> str:
    return f"{SEPARATOR}\n{title}\n{SEPARATOR}\n"


def _confirmation(data: dict) -> str:
    client_ref = data.get("clienteId") or data.get("numeroCita") or "N/A"
    observations = ""
    if data.get("observaciones"):
        observations = f"{_section('📝 *OBSERVACIONES*')}{data['observaciones']}\n\n"
    qr_hint = "🔍 *Escanea el código QR que te enviamos para verificar tu cita.*\n\n" if data.get("qrUrl") else ""

    return (
        "✅ *CONFIRMACIÓN DE CITA - ELECTROHUILA*\n\n"
        f"Hola *{data['nombreCliente']}*,\n\n"
        "Tu cita ha sido confirmada exitosamente:\n\n"
        f"{_section('📋 *DATOS DEL CLIENTE*')}"
        f"👤 *Nombre:* {data['nombreCliente']}\n"
        f"🆔 *Cliente:* {client_ref}\n"
        f"{_line('📱 *Teléfono:*', data.get('telefono'))}"
        f"{_line('🏠 *Dirección:*', data.get('direccionCliente'))}\n"
        f"{_section('📅 *DETALLES DE LA CITA*')}"
        f"🎫 *Número de Cita:* {data.get('numeroCita') or 'N/A'}\n"
        f"📅 *Fecha:* {data['fecha']}\n"
        f"🕐 *Hora:* {data['hora']}\n"
        f"{_line('📝 *Motivo:*', data.get('tipoCita'))}"
        f"{_line('👤 *Atendido por:*', data.get('profesional'))}\n"
        f"{_section('📍 *UBICACIÓN*')}"
        f"📍 *Sede:* {data['ubicacion']}\n"
        f"{_line('🗺️ *Dirección:*', data.get('direccion'))}\n"
        f"{observations}"
        "⏰ *Por favor llega 10 minutos antes de tu cita.*\n\n"
        f"{qr_hint}"
        "Si necesitas reprogramar o cancelar, contáctanos con anticipación.\n\n"
        "¡Te esperamos! 👷‍♂️⚡\n\n"
        f"{SIGNATURE}"
    )


def _reminder(data: dict) -> str:
    advance = f"⏰ Tu cita es {data['anticipacion']}\n" if data.get("anticipacion") else ""
    return (
        "🔔 *RECORDATORIO DE CITA - ELECTROHUILA*\n\n"
        f"Hola *{data['nombreCliente']}*,\n\n"
        "Te recordamos tu cita programada:\n\n"
        f"🎫 *Número de Cita:* {data.get('numeroCita') or 'N/A'}\n"
        f"📅 *Fecha:* {data['fecha']}\n"
        f"🕐 *Hora:* {data['hora']}\n"
        f"📍 *Ubicación:* {data['ubicacion']}\n"
        f"{_line('🗺️ *Dirección:*', data.get('direccion'))}\n"
        f"{advance}\n"
        "Por favor confirma tu asistencia respondiendo este mensaje.\n\n"
        "Si necesitas cancelar o reprogramar, avísanos lo antes posible.\n\n"
        "¡Te esperamos! 👷‍♂️"
    )


def _cancellation(data: dict) -> str:
    reason = f"📋 *Motivo:* {data['motivo']}" if data.get("motivo") else ""
    reschedule = "🔄 Por favor contáctanos para reprogramar tu cita.\n" if data.get("reprogramar") else ""
    return (
        "❌ *CANCELACIÓN DE CITA - ELECTROHUILA*\n\n"
        f"Hola *{data['nombreCliente']}*,\n\n"
        "Lamentamos informarte que tu cita ha sido cancelada:\n\n"
        f"🎫 *Número de Cita:* {data.get('numeroCita') or 'N/A'}\n"
        f"📅 *Fecha:* {data['fecha']}\n"
        f"🕐 *Hora:* {data['hora']}\n"
        f"{reason}\n\n"
        f"{reschedule}"
        "Disculpa las molestias ocasionadas.\n\n"
        "Si tienes alguna duda, estamos a tu disposición. 📞"
    )


def _completed(data: dict) -> str:
    return (
        "✅ *CITA COMPLETADA - ELECTROHUILA*\n\n"
        f"Hola *{data['nombreCliente']}*,\n\n"
        "¡Gracias por asistir a tu cita! 🎉\n\n"
        f"{_section('📋 *DETALLES DEL SERVICIO*')}"
        f"🎫 *Número de Cita:* {data.get('numeroCita') or 'N/A'}\n"
        f"📅 *Fecha:* {data['fecha']}\n"
        f"🕐 *Hora:* {data['hora']}\n"
        f"📍 *Sede:* {data['ubicacion']}\n"
        f"{_line('📝 *Servicio:*', data.get('tipoCita'))}"
        f"{_line('📝 *Observaciones:*', data.get('observaciones'))}"
        f"{SEPARATOR}\n\n"
        "✅ Tu servicio ha sido completado exitosamente.\n\n"
        "Si tienes alguna consulta sobre el servicio realizado o necesitas asistencia adicional, "
        "no dudes en contactarnos. 📞\n\n"
        "¡Gracias por confiar en ElectroHuila! 👷‍♂️⚡\n\n"
        f"{SIGNATURE}"
    )


TEMPLATES: dict[str, dict[str, Any]] = {
    "confirmacion_cita": {
        "required_fields": ["nombreCliente", "fecha", "hora", "ubicacion"],
        "generate": _confirmation,
    },
    "recordatorio_cita": {
        "required_fields": ["nombreCliente", "fecha", "hora", "ubicacion"],
        "generate": _reminder,
    },
    "cancelacion_cita": {
        "required_fields": ["nombreCliente", "fecha", "hora"],
        "generate": _cancellation,
    },
    "cita_completada": {
        "required_fields": ["nombreCliente", "fecha", "hora", "ubicacion"],
        "generate": _completed,
    },
}


def _unknown_template_error(template_name: str) -> str:
    return (
        f"Template '{template_name}' no encontrado. "
        f"Templates disponibles: {', '.join(TEMPLATES.keys())}"
    )


def validate_template_data(template_name: str, data: Optional[dict]) -> dict:
    """
    Check that every required field of a template has a value

    Returns:
        {"valid": bool, "missing_fields": [...], "error": str | None}
    """
    template = TEMPLATES.get(template_name)
    if not template:
        return {"valid": False, "missing_fields": [], "error": _unknown_template_error(template_name)}

    data = data or {}
    missing_fields = [name for name in template["required_fields"] if not data.get(name)]
    if missing_fields:
        return {
            "valid": False,
            "missing_fields": missing_fields,
            "error": f"Faltan campos requeridos: {', '.join(missing_fields)}",
        }
    return {"valid": True, "missing_fields": [], "error": None}


def generate_message(template_name: str, data: Optional[dict]) -> dict:
    """Render a template: {"success": True, "message": ...} or {"success": False, "error": ...}"""
    validation = validate_template_data(template_name, data)
    if not validation["valid"]:
        return {
            "success": False,
            "error": validation["error"],
            "missing_fields": validation["missing_fields"],
        }

    generate: Callable[[dict], str] = TEMPLATES[template_name]["generate"]
    try:
        return {"success": True, "message": generate(data)}
    except Exception as e:
        logger.error(f"❌ Error rendering template {template_name}: {e}")
        return {"success": False, "error": f"Error generando mensaje: {e}"}


def get_available_templates() -> list[dict]:
    return [
        {"name": name, "required_fields": list(template["required_fields"])}
        for name, template in TEMPLATES.items()
    ]
