from js2mqtt.cli import main

main()
