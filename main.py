import sys
import datetime
import logging

from core.converters import convert_to_amps, parse_quantity
from core.export import export_to_excel
from core.models import CircuitType, InstallationMethod, Standard
from core.selector import select_conductor
from core.validation import InputValidationError, validate_input
from core.voltage_drop import sizes_for_target_drop
from standards.tables import TableLookupError

METHOD_CHOICES = {
    "1": InstallationMethod.SINGLE_CONDUIT,
    "2": InstallationMethod.MULTI_CONDUIT,
    "3": InstallationMethod.TRAY,
    "4": InstallationMethod.DIRECT_BURIED,
    "5": InstallationMethod.FREE_AIR,
}


def get_standard():
    print("\n--- Norma de Cálculo ---")
    print("(1) IEC 60364 (mm², metros), (2) NEC (AWG/kcmil, pies)")
    choice = input("Seleccione Norma [1]: ").strip()
    return Standard.NEC if choice == "2" else Standard.IEC


def get_installation_params(standard):
    print("\n--- Parámetros de Instalación (Condiciones Ambientales) ---")

    try:
        temp = float(input("Temperatura Ambiente (°C) [Default 30]: ") or 30.0)
    except ValueError:
        temp = 30.0

    print("Método: (1) Ducto único, (2) Varios ductos, (3) Bandeja, (4) Enterrado, (5) Aire libre")
    method = METHOD_CHOICES.get(input("Seleccione Método [1]: ").strip(),
                                InstallationMethod.SINGLE_CONDUIT)

    mat = input("Material: (1) Cobre, (2) Aluminio [1]: ").strip()
    material = "Aluminum" if mat == "2" else "Copper"

    default_rating = standard.default_insulation.value
    rating = input(f"Temperatura Nominal del Aislamiento (60/70/75/90) [{default_rating}]: ").strip()

    return temp, method, material, rating or None


def get_circuits_input(standard, temp, method, material, rating):
    circuits = []
    print("\n--- Gestión de Circuitos ---")

    while True:
        print(f"\n[Circuito #{len(circuits) + 1}]")
        name = input("Nombre del Circuito: ").strip()
        if not name:
            break

        try:
            voltage = float(input("Voltaje (V): "))
            phases = input("Fases (1 o 3) [1]: ").strip()
            circuit_type = CircuitType.THREE_PHASE if phases == "3" else CircuitType.SINGLE_PHASE

            p_val, p_unit = parse_quantity(
                input("Carga (ej: 20 A, 10 KW, 5 HP, 50 KVA): "), "A")
            pf = 1.0
            if p_unit.upper() in ["W", "KW", "MW", "HP"]:
                pf = float(input("Factor de Potencia [0.9]: ") or 0.9)
            current = convert_to_amps(p_val, p_unit, voltage, circuit_type, pf)

            default_count = 3 if circuit_type is CircuitType.THREE_PHASE else 2
            count = int(input(f"N° Total de conductores agrupados [{default_count}]: ")
                        or default_count)

            l_val, l_unit = parse_quantity(
                input("Longitud del circuito (ej: 50 m, 100 ft): "), standard.length_unit.value)

            max_vd = float(input("Caída de tensión máxima (%) [3]: ") or 3.0)
            size = input("Calibre a verificar (Enter para dimensionar): ").strip() or None

            sizing_input = validate_input(
                current=current, length=l_val, length_unit=l_unit,
                system_voltage=voltage, material=material,
                installation_method=method, circuit_type=circuit_type,
                ambient_temperature=temp, conductor_count=count,
                standard=standard, insulation_rating=rating,
                max_voltage_drop_percent=max_vd,
                size=size,
            )
            circuits.append((name, sizing_input))

        except InputValidationError as e:
            for err in e.errors:
                print(f"Error en entrada de datos: {err}")
        except ValueError as e:
            print(f"Error en entrada de datos: {e}. Intente de nuevo.")

        more = input("¿Agregar otro circuito? (s/n): ").lower()
        if more != 's':
            break

    return circuits


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("==========================================================")
    print(" DIMENSIONAMIENTO DE CONDUCTORES (IEC / NEC)")
    print("==========================================================")

    standard = get_standard()
    temp, method, material, rating = get_installation_params(standard)
    circuits = get_circuits_input(standard, temp, method, material, rating)

    if not circuits:
        print("No se ingresaron circuitos.")
        sys.exit()

    print("\nCalculando Conductores...")
    print("-" * 110)
    print(f"{'Circuito':<15} | {'Amps':<7} | {'Calibre':<22} | {'Amp.Corr':<8} | {'% VD':<8} | {'Tierra':<10} | {'Notas'}")
    print("-" * 110)

    results = []
    checked = []
    for name, sizing_input in circuits:
        try:
            result = select_conductor(sizing_input)
        except TableLookupError as e:
            print(f"{name:<15} | Sin resultado: {e}")
            continue
        results.append(result)
        checked.append((sizing_input, result))

        warn = "" if result.compliance.is_fully_compliant else " (!)"
        vd = result.voltage_drop.percent or 0.0
        earth = result.earth_conductor.formatted_size if result.earth_conductor else "-"
        note = result.warnings[0][:30] + "..." if result.warnings else ""
        print(f"{name:<15} | {sizing_input.current:<7.1f} | {result.formatted_size:<22} | "
              f"{result.ampacity.derated:<8.1f} | {vd:<6.2f}{warn:<2} | {earth:<10} | {note}")

    print("-" * 110)

    for sizing_input, result in checked:
        for warning in result.warnings:
            print(f"[AVISO] {result.formatted_size}: {warning}")
        if not result.compliance.is_voltage_drop_compliant:
            fits = sizes_for_target_drop(
                sizing_input.current, sizing_input.length, sizing_input.material,
                sizing_input.circuit_type, sizing_input.standard, sizing_input.system_voltage,
                sizing_input.max_voltage_drop_percent,
            )
            print(f"[INFO] Calibres que cumplen la caída de tensión: {', '.join(fits) or 'ninguno'}")

    if results:
        ask = input("\n¿Exportar reporte a Excel? (s/n): ").lower()
        if ask == 's':
            filename = f"Memoria_Conductores_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
            export_to_excel(results, filename)
            print(f"\n[INFO] Excel generado: {filename}")


if __name__ == "__main__":
    main()
