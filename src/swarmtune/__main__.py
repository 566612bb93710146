from swarmtune.cli import main

raise SystemExit(main())
